from datetime import datetime, timezone
from pathlib import Path

from aws_cdk import (
    Stack,
    aws_apigateway as apigw,
    aws_certificatemanager as acm,
    aws_dynamodb as dynamodb,
    aws_lambda as _lambda,
    aws_route53 as route53,
    RemovalPolicy,
    CfnOutput,
)
from constructs import Construct

from restaurant_event_api.config import DEFAULT_PARENT_DOMAIN

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class RestaurantEventApiStack(Stack):

    def __init__(
        self,
        scope: Construct,
        id: str,
        subdomain: str,
        parent_domain: str = DEFAULT_PARENT_DOMAIN,
        lambda_asset_path: str = "lambda/event_lambda",
        lambda_handler: str = "handler.main",
        **kwargs,
    ) -> None:
        super().__init__(scope, id, **kwargs)

        api_domain_name = f"{subdomain}.{parent_domain}"

        # Existing public zone; lookup needs an explicit account/region on the stack
        self.hosted_zone = route53.HostedZone.from_lookup(self, "Cloud101HostedZone",
            domain_name=parent_domain,
        )

        # Event store, keyed by event and time
        self.event_database = dynamodb.Table(self, f"{subdomain}EventDatabase",
            table_name=f"{subdomain}EventDatabase",
            partition_key=dynamodb.Attribute(name="eventId", type=dynamodb.AttributeType.STRING),
            sort_key=dynamodb.Attribute(name="timestamp", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            deletion_protection=False,
            stream=dynamodb.StreamViewType.NEW_IMAGE,
        )

        deployed_at = datetime.now(timezone.utc).isoformat()
        self.event_lambda = _lambda.Function(self, f"{subdomain}EventLambda",
            function_name=f"{subdomain}EventLambda",
            description=(
                "Receives events from the API Gateway and stores in DynamoDB. "
                f"Deployed at {deployed_at}"
            ),
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler=lambda_handler,
            code=_lambda.Code.from_asset(str(_asset_dir(lambda_asset_path))),
            environment={
                "EVENT_SOURCE_TABLE_NAME": self.event_database.table_name,
            },
        )

        self.event_database.grant_read_write_data(self.event_lambda)

        self.api_certificate = acm.Certificate(self, f"{subdomain}EventCertificate",
            domain_name=api_domain_name,
            certificate_name=f"{subdomain}EventCertificate",
            validation=acm.CertificateValidation.from_dns(self.hosted_zone),
        )

        # Public so the frontend distribution can point at it
        self.event_lambda_api = apigw.LambdaRestApi(self, f"{subdomain}EventLambdaApi",
            handler=self.event_lambda,
            proxy=True,
            domain_name=apigw.DomainNameOptions(
                domain_name=api_domain_name,
                endpoint_type=apigw.EndpointType.REGIONAL,
                certificate=self.api_certificate,
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=apigw.Cors.ALL_METHODS,
                allow_headers=["*"],
                allow_credentials=True,
            ),
            # TODO: replace with a Cognito user pool authorizer
            default_method_options=apigw.MethodOptions(
                authorization_type=apigw.AuthorizationType.NONE,
            ),
        )

        # Throwaway environment: nothing is retained on teardown
        for resource in (
            self.event_lambda_api,
            self.event_database,
            self.event_lambda,
            self.api_certificate,
        ):
            resource.apply_removal_policy(RemovalPolicy.DESTROY)

        CfnOutput(self, "EventApiDomainUrl", value=f"https://{api_domain_name}/")
        CfnOutput(self, "EventTableName", value=self.event_database.table_name)


def _asset_dir(path: str) -> Path:
    asset = Path(path)
    if not asset.is_absolute():
        asset = PROJECT_ROOT / asset
    return asset
