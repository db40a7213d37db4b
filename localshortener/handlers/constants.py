# Event codes attached to handler log records and error responses
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_EXPIRED = 'SHORT_URL_EXPIRED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
