from restaurant_event_api.config import StackConfig, config_from_app, load_config
from restaurant_event_api.restaurant_event_api_stack import RestaurantEventApiStack

__all__ = ["RestaurantEventApiStack", "StackConfig", "config_from_app", "load_config"]
