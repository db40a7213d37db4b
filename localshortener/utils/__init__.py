from localshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config
from localshortener.utils.helpers import utc_now, get_short_url, coarse_location, caller_context
from localshortener.utils.shortener import generate_shortcode
from localshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'utc_now',
    'get_short_url',
    'coarse_location',
    'caller_context',
    'initialize_logging',
]
