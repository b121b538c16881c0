# retail_dashboard/constants.py
APP_NAME = "Retail Dashboard"
STYLE_FILE = "style.qss"

# storage
DATA_DIR = "data"
DB_FILE_NAME = "retail.db"
TABLE_SCHEMA_VERSION = "schema_version"
TABLE_KV_STORE = "kv_store"
SCHEMA_VERSION = "1.0"

KEY_PRODUCTS = "products"
KEY_SALES = "sales"

# business rules
MIN_MARGIN_FACTOR = 1.2          # suggested minimum resale price = cost * factor
REVENUE_CHART_DAYS = 7           # distinct sale dates shown on the revenue chart
TOP_PRODUCTS_LIMIT = 5

# insights
INSIGHTS_PROVIDER_NONE = "none"
INSIGHTS_PROVIDER_GEMINI = "gemini"
INSIGHTS_RECENT_SALES = 10
GEMINI_MODEL = "gemini-2.5-flash"
