"""
Twitch OAuth constants
"""

# OAuth Configuration
TWITCH_AUTH_BASE_URL = "https://id.twitch.tv/oauth2/"
DEFAULT_SCOPE = "channel:manage:redemptions"

# Local callback server
DEFAULT_CALLBACK_PORT = 8080

# Token exchange
EXCHANGE_TIMEOUT = 60.0

SUCCESS_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <style type="text/css">body{
    margin:40px auto;
    max-width:650px;
    line-height:1.6;
    font-size:18px;
    color:#888;
    background-color:#111;
    padding:0 10px
    }
    h1{line-height:1.2}
    </style>
    <title>TART OAuth</title>
</head>
<body>
    <h1>Thanks for Authenticating with TART OAuth!</h1>
You may now close this page.
</body>
</html>"""
