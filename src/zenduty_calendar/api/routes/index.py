"""Landing page."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>zenduty-calendar</title>
</head>
<body>
  <h1>zenduty-calendar</h1>
  <p>Subscribe to these URLs from your calendar application:</p>
  <ul>
    <li><code>/myschedule</code>: combined on-call schedule of the configured user</li>
    <li><code>/myschedule/{email}</code>: combined on-call schedule of any team member</li>
    <li><code>/calendar/{team}/{schedule}/{email}</code>: one schedule, filtered to one member</li>
  </ul>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def index():
    return INDEX_HTML
