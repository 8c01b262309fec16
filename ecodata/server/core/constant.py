PROJECT_NAME = "ECODATA CIC"
API_PREFIX = "/api"
ADMIN_PREFIX = f"{API_PREFIX}/admin"
SCHEMA_VERSION = "v1"
