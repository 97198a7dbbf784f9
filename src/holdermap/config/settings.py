import os
from dotenv import load_dotenv
load_dotenv()

HTTP_USER_AGENT = os.environ.get(
    "HOLDERMAP_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)

# ---- Bubblemaps (holder graph + map metadata) ----
BUBBLEMAPS_BASE_URL = os.environ.get("BUBBLEMAPS_BASE_URL", "https://api-legacy.bubblemaps.io")
BUBBLEMAPS_APP_URL = "https://app.bubblemaps.io"
BUBBLEMAPS_REQUESTS_PER_SEC = 2.0
BUBBLEMAPS_TIMEOUT_SEC = 20
BUBBLEMAPS_MAX_RETRIES = 3

# ---- DexScreener (market aggregator) ----
DEXSCREENER_BASE_URL = "https://api.dexscreener.com/latest/dex"
DEXSCREENER_REQUESTS_PER_SEC = 1.0
DEXSCREENER_TIMEOUT_SEC = 15
DEXSCREENER_MAX_RETRIES = 3

# ---- CoinGecko (listing / links) ----
COINGECKO_BASE_URL = os.environ.get("COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3")
COINGECKO_SITE_URL = "https://coingecko.com/en/coins"
COINGECKO_API_KEY = os.environ.get("COINGECKO_API_KEY")   # optional demo key
COINGECKO_REQUESTS_PER_SEC = 0.5
COINGECKO_TIMEOUT_SEC = 15
COINGECKO_MAX_RETRIES = 2

# ----- Holder analysis -----
HOLDER_GROUP_SIZES = (10, 25, 100)
TOP_CLUSTER_COUNT = 5

# Chains whose supply decimals can't be checked from the holder data, so the
# aggregator's market cap is kept as-is. Comma separated canonical chain codes.
MARKET_CAP_OVERRIDE_EXCLUDED_CHAINS = frozenset(
    c.strip().lower()
    for c in os.environ.get("HOLDERMAP_MCAP_EXCLUDED_CHAINS", "sol").split(",")
    if c.strip()
)

# ----- Logging -----
LOG_LEVEL = os.environ.get("HOLDERMAP_LOG_LEVEL", "INFO")
LOG_JSON = os.environ.get("HOLDERMAP_LOG_JSON", "0") == "1"
