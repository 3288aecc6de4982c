# src/chainview/utils/config.py

class Config:
    # Listing policy
    BLOCK_HEIGHT_FLOOR = 1_200_000  # blocks at or below this index are never listed
    RECENT_TRANSACTION_WINDOW = 3600  # 1 hour in seconds
    LISTING_LIMIT = 20

    # Sentinel identifier value
    NOT_FOUND = "not found"

    # Asset names reported under their current ticker
    ASSET_NAME_ALIASES = {
        "AntShare": "NEO",
        "AntCoin": "GAS",
    }
    ASSET_NAME_LANG = "en"

    # Network monitor
    MONITOR_REFRESH_INTERVAL = 300  # 5 minutes
    NODE_REQUEST_TIMEOUT = 10  # seconds per node
    SEED_NODES = [
        "http://seed1.cityofzion.io:8080",
        "http://seed2.cityofzion.io:8080",
        "http://seed3.cityofzion.io:8080",
        "http://seed4.cityofzion.io:8080",
        "http://seed5.cityofzion.io:8080",
        "http://api.otcgo.cn:10332",
        "http://seed1.neo.org:10332",
        "http://seed2.neo.org:10332",
        "http://seed3.neo.org:10332",
        "http://seed4.neo.org:10332",
        "http://seed5.neo.org:10332",
    ]

    # Database
    DEFAULT_DB_PATH = "data/ledger.db"

    # HTTP API
    API_PREFIX = "/api/main_net/v1"
    API_HOST = "0.0.0.0"
    API_PORT = 4000
