DEFAULT_FONT = "Noto Sans"

DEFAULT_DONATIONS_URL = (
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vS1gk8NEzkYM4dW211o-knOAufdli"
    "-gEoZLaunhkfDrSPCm0iDa4HEo92br6jP7Q0JRkS0i_HB7mK7P/pub?gid=0&single=true&output=csv"
)
DEFAULT_CONFIG_URL = (
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vS1gk8NEzkYM4dW211o-knOAufdli"
    "-gEoZLaunhkfDrSPCm0iDa4HEo92br6jP7Q0JRkS0i_HB7mK7P/pub?gid=1502649564&single=true"
    "&output=csv"
)

# Seconds
DEFAULT_TIMEOUT = 30

# Milliseconds between feed refreshes; also how soon a failed fetch is retried.
DEFAULT_REFRESH_INTERVAL = 60_000

# Shortest refresh interval the Options menu will accept, in milliseconds.
MINIMUM_REFRESH_INTERVAL = 1000
