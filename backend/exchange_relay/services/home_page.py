"""
Landing page HTML for the relay.

Shows configuration status without revealing any secret values.
"""
from html import escape

from exchange_relay.api.models.manifest import PROVIDER_ID

RESOURCE_NAME = "Azure OpenAI"

HOME_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Exchange Relay · {provider_id}</title>
<meta name="viewport" content="width=device-width, initial-scale=1" />
<style>
  :root {{ color-scheme: light dark; }}
  body {{ font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; margin: 2rem; line-height: 1.5; }}
  .card {{ border: 1px solid #9993; border-radius: 12px; padding: 1rem 1.25rem; max-width: 860px; box-shadow: 0 1px 8px #0001; }}
  h1 {{ margin: 0 0 .25rem 0; font-size: 1.4rem; }}
  code, pre {{ font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, "Liberation Mono", monospace; }}
  pre {{ background: #0000000d; padding: .75rem; border-radius: 8px; overflow-x: auto; }}
  .grid {{ display: grid; gap: .5rem 1rem; grid-template-columns: 11rem 1fr; }}
  a {{ text-decoration: none; }}
</style>
</head>
<body>
  <div class="card">
    <h1>Exchange Relay</h1>
    <div>Resource: <strong>{resource_name}</strong> · Version: <strong>{version}</strong></div>
    <p>This relay exposes minimal endpoints for Kea. Try the links below.</p>

    <h2>Useful links</h2>
    <ul>
      <li><a href="/kea/v1/provider">/kea/v1/provider</a> – provider info</li>
      <li><a href="/kea/v1/manifest">/kea/v1/manifest</a> – deployments (displayName → deploymentName)</li>
      <li><code>POST /kea/v1/chat</code> – chat completions (see curl example)</li>
    </ul>

    <h2>Status (no secrets shown)</h2>
    <div class="grid">
      <div>Endpoint set:</div><div>{endpoint_set}</div>
      <div>API version:</div><div>{api_version}</div>
      <div>API key set:</div><div>{api_key_set}</div>
      <div>MODEL_MAP entries:</div><div>{model_count}</div>
    </div>

    <h2>curl example</h2>
    <pre>curl -s -X POST http(s)://&lt;host&gt;/kea/v1/chat \\
  -H "Content-Type: application/json" \\
  -d '{{ "model":"&lt;deploymentName&gt;", "max_tokens":128,
        "messages":[{{"role":"user","content":"Hello from Kea"}}] }}'</pre>
  </div>
</body>
</html>"""


def render_home_html(
    version: str,
    has_endpoint: bool,
    has_api_key: bool,
    api_version: str,
    model_count: int,
) -> str:
    return HOME_TEMPLATE.format(
        provider_id=PROVIDER_ID,
        resource_name=RESOURCE_NAME,
        version=escape(version),
        endpoint_set="yes" if has_endpoint else "no",
        api_version=escape(api_version),
        api_key_set="yes" if has_api_key else "no",
        model_count=model_count,
    )
