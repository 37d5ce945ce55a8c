"""Internal constants shared across the library."""

USER_AGENT = "pyglobe"
DEFAULT_TIMEOUT: float = 5.0
DEFAULT_COOKIE_NAME = "auth_token"

AUTH_URL = "http://localhost:8080"
PROFILE_URL = "http://localhost:8081"
MEDIA_URL = "http://localhost:8082"
GLOBES_URL = "http://localhost:8083"
LIKES_URL = "http://localhost:8084"

# ------------------------------------------------------------------
# Credential store keys
# ------------------------------------------------------------------

ACCESS_TOKEN_KEY = "auth_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_ID_KEY = "user_id"

CREDENTIAL_KEYS: tuple[str, ...] = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_ID_KEY)

# ------------------------------------------------------------------
# Auth service endpoints
# ------------------------------------------------------------------

LOGIN_ENDPOINT = "/login"
SIGNUP_ENDPOINT = "/register"
LOGOUT_ENDPOINT = "/logout"
REFRESH_TOKEN_ENDPOINT = "/refresh-token"
VALIDATE_TOKEN_ENDPOINT = "/validate-token"
FORGOT_PASSWORD_ENDPOINT = "/forgot-password"
RESET_PASSWORD_ENDPOINT = "/reset-password"
UPDATE_PASSWORD_ENDPOINT = "/update-password"
PROFILE_ENDPOINT = "/profile"
