import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from restaurant_event_api.restaurant_event_api_stack import RestaurantEventApiStack

TEST_ENV = cdk.Environment(account="123456789012", region="eu-west-1")


@pytest.fixture
def cdk_env():
    return TEST_ENV


@pytest.fixture
def stack():
    app = cdk.App()
    return RestaurantEventApiStack(app, "TestRestaurantEventApiStack", subdomain="demo", env=TEST_ENV)


@pytest.fixture
def template(stack):
    return Template.from_stack(stack)
