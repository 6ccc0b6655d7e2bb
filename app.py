#!/usr/bin/env python3
import logging

import aws_cdk as cdk
from pydantic import ValidationError

from restaurant_event_api.config import config_from_app
from restaurant_event_api.restaurant_event_api_stack import RestaurantEventApiStack

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("restaurant_event_api.app")

app = cdk.App()

try:
    config = config_from_app(app)
except ValidationError as e:
    logger.error("Invalid stack configuration (set -c subdomain=<name> or SUBDOMAIN): %s", e)
    raise

stack = RestaurantEventApiStack(app, config.stack_id,
    subdomain=config.subdomain,
    parent_domain=config.parent_domain,
    lambda_asset_path=config.lambda_asset_path,
    lambda_handler=config.lambda_handler,
    env=cdk.Environment(account=config.account, region=config.region),
    description=f"Restaurant event API for {config.api_domain_name}",
)

cdk.Tags.of(stack).add("App", "restaurant-event-api")
cdk.Tags.of(stack).add("Subdomain", config.subdomain)

logger.info("Synthesizing %s for https://%s/", config.stack_id, config.api_domain_name)

app.synth()
