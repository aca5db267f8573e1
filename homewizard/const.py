"""Constants for the HomeWizard library."""

# mDNS service advertised by HomeWizard Energy devices
SERVICE_TYPE = "_hwenergy._tcp.local."

# API endpoints
ENDPOINT_API = "/api"
ENDPOINT_DATA = "/api/{api_version}/data"

# Identifier of this exporter in every measurement
SOURCE = "jarvis-homewizard-exporter"

# Vendor product types
PRODUCT_TYPE_P1_METER = "HWE-P1"
PRODUCT_TYPE_ENERGY_SOCKET = "HWE-SKT"
PRODUCT_TYPE_WATER_METER = "HWE-WTR"
PRODUCT_TYPE_SINGLE_PHASE_KWH_METER = "SDM230-wifi"
PRODUCT_TYPE_TRIPLE_PHASE_KWH_METER = "SDM630-wifi"

# Tariff labels used for P1 meter counters
TARIFF_T1_IMPORT = "t1 import"
TARIFF_T1_EXPORT = "t1 export"
TARIFF_T2_IMPORT = "t2 import"
TARIFF_T2_EXPORT = "t2 export"

DEFAULT_PORT = 80
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10
# Budget for resolving a single announced service into its addresses
RESOLVE_TIMEOUT_MS = 3000
