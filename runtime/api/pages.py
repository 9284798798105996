"""
HTML for the login form and the log viewer (no external assets).

The viewer is a small polling page on top of the JSON API:

    GET  /logs                       -> server list
    GET  /logs?server=S              -> resource list
    GET  /logs?server=S&resource=R   -> records
    POST /clear
"""

from __future__ import annotations

import html


def _page_template(body: str, title: str, script: str = "", body_attrs: str = "") -> str:
    """Lightweight HTML scaffold shared by every page."""
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{html.escape(title)}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    :root {{
      --bg: #0f172a; --fg: #e2e8f0; --muted:#94a3b8; --err:#ef4444; --card:#111827; --btn:#2563eb;
    }}
    body {{ background: var(--bg); color: var(--fg); font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Ubuntu, Arial; margin: 0; padding: 1.5rem; }}
    .card {{ background: var(--card); border-radius: 14px; padding: 1.25rem; box-shadow: 0 8px 24px rgba(0,0,0,.25); }}
    .login {{ max-width: 320px; margin: 4rem auto; }}
    h1 {{ font-size: 1.4rem; margin: 0 0 1rem; }}
    label {{ display: block; margin: .25rem 0 .5rem; color: var(--muted); }}
    input[type="password"], select {{
      width: 100%; padding: .5rem .6rem; border-radius: .5rem; border: 1px solid #334155; background: #0b1220; color: var(--fg);
    }}
    .btn {{ background: var(--btn); color: white; border: 0; padding: .55rem 1rem; border-radius: .6rem; cursor: pointer; text-decoration: none; }}
    .btn.danger {{ background: var(--err); }}
    .muted {{ color: var(--muted); font-size: .9rem; }}
    .toolbar {{ display: grid; grid-template-columns: 1fr 1fr auto auto; gap: .75rem; align-items: end; margin-bottom: 1rem; }}
    .record {{ border-bottom: 1px solid #1f2937; padding: .5rem 0; }}
    .record pre {{ margin: .25rem 0 0; white-space: pre-wrap; word-break: break-word; font-size: .85rem; }}
    .tag {{ display: inline-block; padding: .1rem .5rem; border-radius: 999px; background: #0b1220; border: 1px solid #334155; margin-right: .5rem; }}
    #records {{ max-height: 75vh; overflow-y: auto; }}
  </style>
</head>
<body{body_attrs}>
{body}
{script}
</body></html>"""


def login_page() -> str:
    body = """
  <div class="card login">
    <h1>NUI Logger</h1>
    <form method="post" action="/login">
      <label for="pin">PIN</label>
      <input id="pin" type="password" name="pin" autocomplete="current-password" autofocus required />
      <p><button class="btn" type="submit">Enter</button></p>
    </form>
  </div>
"""
    return _page_template(body, "NUI Logger - Login")


_VIEWER_SCRIPT = """
<script>
(function() {
  const FLAT = document.body.dataset.flat === '1';
  const POLL_MS = 2000;
  const ICONS = { lua_to_nui: '📨', nui_to_lua: '📤', fetch_call: '🌐', console: '🖥️' };

  const serverSel = document.getElementById('server');
  const resourceSel = document.getElementById('resource');
  const recordsBox = document.getElementById('records');
  const statusBox = document.getElementById('status');
  const clearBtn = document.getElementById('clear-btn');

  if (FLAT) document.getElementById('server-row').style.display = 'none';

  async function getJson(url) {
    const res = await fetch(url, { credentials: 'same-origin', redirect: 'manual' });
    if (res.type === 'opaqueredirect' || res.redirected) {
      window.location = '/login';
      throw new Error('not logged in');
    }
    const body = await res.json();
    if (!res.ok) throw new Error(body.error || res.statusText);
    return body;
  }

  function fillSelect(sel, values) {
    const current = sel.value;
    sel.innerHTML = '<option value="">-- choose --</option>';
    values.forEach(v => {
      const opt = document.createElement('option');
      opt.value = v; opt.textContent = v;
      sel.appendChild(opt);
    });
    if (values.includes(current)) sel.value = current;
  }

  function renderRecords(records) {
    const atBottom = recordsBox.scrollTop + recordsBox.clientHeight >= recordsBox.scrollHeight - 20;
    recordsBox.innerHTML = '';
    records.forEach(r => {
      const div = document.createElement('div');
      div.className = 'record';
      const head = document.createElement('div');
      const tag = document.createElement('span');
      tag.className = 'tag';
      tag.textContent = (ICONS[r.type] || '📝') + ' ' + (r.type || '?');
      head.appendChild(tag);
      head.appendChild(document.createTextNode(r.timestamp || ''));
      const pre = document.createElement('pre');
      const { timestamp, type, ...payload } = r;
      pre.textContent = JSON.stringify(payload, null, 2);
      div.appendChild(head);
      div.appendChild(pre);
      recordsBox.appendChild(div);
    });
    if (atBottom) recordsBox.scrollTop = recordsBox.scrollHeight;
  }

  async function refreshServers() {
    if (FLAT) return;
    fillSelect(serverSel, await getJson('/logs'));
  }

  async function refreshResources() {
    if (FLAT) {
      fillSelect(resourceSel, await getJson('/logs'));
    } else if (serverSel.value) {
      fillSelect(resourceSel, await getJson('/logs?server=' + encodeURIComponent(serverSel.value)));
    } else {
      fillSelect(resourceSel, []);
    }
  }

  async function refreshRecords() {
    if (!resourceSel.value || (!FLAT && !serverSel.value)) {
      recordsBox.innerHTML = '<p class="muted">Pick a resource.</p>';
      return;
    }
    const params = new URLSearchParams({ resource: resourceSel.value });
    if (!FLAT) params.set('server', serverSel.value);
    renderRecords(await getJson('/logs?' + params.toString()));
  }

  async function poll() {
    try {
      await refreshServers();
      await refreshResources();
      await refreshRecords();
      statusBox.textContent = 'Updated ' + new Date().toLocaleTimeString();
    } catch (err) {
      statusBox.textContent = '❌ ' + String(err.message || err);
    }
  }

  serverSel.addEventListener('change', poll);
  resourceSel.addEventListener('change', refreshRecords);

  clearBtn.addEventListener('click', async function() {
    if (!resourceSel.value) return;
    if (!confirm('Clear logs for ' + resourceSel.value + '?')) return;
    const payload = { resource: resourceSel.value };
    if (!FLAT) payload.server = serverSel.value;
    const res = await fetch('/clear', {
      method: 'POST',
      credentials: 'same-origin',
      headers: { 'Content-Type': 'application/json' },
      body: JSON.stringify(payload)
    });
    const body = await res.json().catch(() => ({}));
    statusBox.textContent = body.message || body.error || res.statusText;
    await refreshRecords();
  });

  poll();
  setInterval(poll, POLL_MS);
})();
</script>
"""


def viewer_page(flat: bool = False) -> str:
    body = """
  <div class="card" id="viewer">
    <h1>NUI Logger</h1>
    <div class="toolbar">
      <div id="server-row">
        <label for="server">Server</label>
        <select id="server"></select>
      </div>
      <div>
        <label for="resource">Resource</label>
        <select id="resource"></select>
      </div>
      <button id="clear-btn" class="btn danger" type="button">Clear</button>
      <a class="btn" href="/logout">Log out</a>
    </div>
    <div id="status" class="muted"></div>
    <div id="records"></div>
  </div>
"""
    return _page_template(
        body, "NUI Logger", _VIEWER_SCRIPT, body_attrs=f' data-flat="{1 if flat else 0}"'
    )
