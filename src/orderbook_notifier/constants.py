WEBHOOK_CONFIG_BUCKET = 'order-webhook-notification-config'
PRODUCTION_WEBHOOK_CONFIG_KEY = 'production.json'
BETA_WEBHOOK_CONFIG_KEY = 'beta.json'

ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'

WEBHOOK_TIMEOUT_SECONDS = 0.2
WEBHOOK_CONFIG_REFRESH_SECONDS = 5 * 60

STALE_ORDER_THRESHOLD_SECONDS = 20
STALE_ORDER_THRESHOLD_BLOCKS = 5
