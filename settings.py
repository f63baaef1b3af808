from config.loader import get_config_loader
from tart_oauth.constants import DEFAULT_SCOPE, TWITCH_AUTH_BASE_URL
from tart_oauth.constants import EXCHANGE_TIMEOUT as DEFAULT_EXCHANGE_TIMEOUT

# Get the config loader instance
config = get_config_loader()

LOG_LEVEL = config.get("LOG_LEVEL", "info")
DEBUG_LOG_FILE = config.get("TART_DEBUG_LOG_FILE", "tart_debug.log")

# OAuth configuration (hardcoded - not user configurable)
AUTH_BASE_URL = TWITCH_AUTH_BASE_URL

# Application credentials registered in the Twitch dev console
CLIENT_ID = config.get_optional("TART_CLIENT_ID")
CLIENT_SECRET = config.get_optional("TART_CLIENT_SECRET")
# Needs to match the redirect URI set in the Twitch dev console
ADDRESS = config.get_optional("TART_ADDRESS")
# Existing access token; skips the browser flow when set
TOKEN = config.get_optional("TART_TOKEN")
SCOPE = config.get("TART_SCOPE", DEFAULT_SCOPE)

# Seconds to wait for the server to start and for the redirect (0 = wait forever)
CALLBACK_TIMEOUT = config.get("TART_CALLBACK_TIMEOUT", 0.0)
EXCHANGE_TIMEOUT = config.get("TART_EXCHANGE_TIMEOUT", DEFAULT_EXCHANGE_TIMEOUT)
