# =============================================================================
# app/api/endpoints/pages.py
# =============================================================================
from html import escape
from fastapi import APIRouter, Query
from fastapi.responses import HTMLResponse, PlainTextResponse
from app.core.config import settings

router = APIRouter()

PAGE_STYLE = """
    body { font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; background-color: #f8f9fa; }
    .container { background: white; padding: 40px; border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); text-align: center; }
    h1 { color: #333; }
    .slack-button { display: inline-block; background-color: #4A154B; color: white; padding: 12px 24px;
                    text-decoration: none; border-radius: 5px; font-weight: bold; margin: 20px 0; }
    .info { background-color: #e8f4f8; padding: 20px; border-radius: 5px; margin: 20px 0; text-align: left; }
    .code { background-color: #f1f1f1; padding: 10px; border-radius: 5px; font-family: monospace; margin: 10px 0; }
    .back-link { display: inline-block; background-color: #007bff; color: white; padding: 10px 20px;
                 text-decoration: none; border-radius: 5px; margin-top: 20px; }
"""

def render_page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{PAGE_STYLE}</style>
</head>
<body>
    <div class="container">
{body}
    </div>
</body>
</html>"""

@router.get("/", response_class=HTMLResponse)
async def landing_page():
    """Landing page with the "Add to Slack" button"""
    urls = settings.redirect_urls
    body = f"""
        <h1>🚀 Slack Translation App</h1>
        <p>Click the button below to add this app to your Slack workspace</p>
        <a href="/slack/oauth/authorize" class="slack-button">Add to Slack</a>
        <div class="info">
            <h3>📋 Redirect URLs Configuration</h3>
            <p>Register these URLs in your Slack app settings:</p>
            <div class="code"><strong>OAuth Callback URL:</strong><br>{escape(urls["oauth_callback"])}</div>
            <div class="code"><strong>Success URL:</strong><br>{escape(urls["success"])}</div>
            <div class="code"><strong>Error URL:</strong><br>{escape(urls["error"])}</div>
        </div>
        <div class="info">
            <h3>⚙️ Setup Instructions</h3>
            <ol>
                <li>Create a Slack app at <a href="https://api.slack.com/apps" target="_blank">api.slack.com/apps</a></li>
                <li>Add the OAuth Callback URL above under "OAuth &amp; Permissions"</li>
                <li>Point the /translate-config command, Interactivity and Event Subscriptions at this server</li>
                <li>Set SLACK_CLIENT_ID and SLACK_CLIENT_SECRET in your environment</li>
            </ol>
        </div>"""
    return render_page("Slack Translation App", body)

@router.get("/success", response_class=HTMLResponse)
async def success_page(team: str = Query("your workspace")):
    body = f"""
        <div style="font-size: 64px;">✅</div>
        <h1>Installation Successful!</h1>
        <p>The app has been installed to <strong>{escape(team)}</strong>.</p>
        <p>Run <code>/translate-config</code> in a channel to choose when messages get translated.</p>
        <a href="/" class="back-link">← Back to Home</a>"""
    return render_page("Installation Successful", body)

@router.get("/error", response_class=HTMLResponse)
async def error_page(error: str = Query("unknown_error")):
    body = f"""
        <div style="font-size: 64px;">❌</div>
        <h1>Installation Failed</h1>
        <p>Something went wrong while installing the app:</p>
        <div class="code">{escape(error)}</div>
        <a href="/" class="back-link">← Try Again</a>"""
    return render_page("Installation Failed", body)

@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "pong"
