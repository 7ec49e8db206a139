from __future__ import annotations

# ruff: noqa: E501
import json


def render_viewer_html(relay_url: str) -> str:
    """
    Notebook viewer HTML (single page app).

    The page only renders: it applies `hand`, `pose`, `line_text`, `strike`
    and `clear` commands streamed by the overlay. Line geometry mirrors
    `notebook.layout` (percent of the notebook box).
    """
    return f"""
<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width,initial-scale=1" />
    <title>subscriber notebook</title>
    <link rel="preconnect" href="https://fonts.googleapis.com" />
    <link href="https://fonts.googleapis.com/css2?family=Caveat&display=swap" rel="stylesheet" />
    <style>
      html, body {{ height: 100%; margin: 0; background: transparent; overflow: hidden; }}
      #notebook {{ position: absolute; left: 50%; top: 50%; width: min(100vw, 177.78vh); aspect-ratio: 16 / 9; transform: translate(-50%, -50%); }}
      .page {{ position: absolute; top: 10%; height: 75%; width: 40%; background: #f6ecd6; box-shadow: 0 4px 18px rgba(0,0,0,0.35); }}
      .page.left {{ left: 5%; border-radius: 6px 0 0 6px; }}
      .page.right {{ left: 55%; border-radius: 0 6px 6px 0; }}
      .line {{ position: absolute; border-bottom: 1px solid #c4b6a0; box-sizing: border-box; display: flex; align-items: center; }}
      .text-wrapper {{ display: inline-block; position: relative; }}
      .line-content {{ font-family: 'Caveat', cursive; font-size: 4vh; letter-spacing: 0.5px; white-space: nowrap; color: #221e3c; transform: rotate(-0.5deg); }}
      .strikethrough-line {{ position: absolute; height: 2px; background: #ff0000; top: 50%; right: 0; width: 0%; transform: translateY(-50%); pointer-events: none; transition-property: width; transition-timing-function: ease-in-out; }}
      #hand {{ position: absolute; width: 2.2%; aspect-ratio: 1; margin: -1.1% 0 0 -1.1%; border-radius: 50%; transition-property: left, top, transform; z-index: 20; }}
      #hand.resting {{ background: rgba(120,120,120,0.9); }}
      #hand.writing {{ background: rgba(40,90,200,0.9); }}
      #status {{ position: fixed; bottom: 6px; left: 8px; font: 12px ui-sans-serif, system-ui; color: #e6edf3; opacity: 0.7; }}
    </style>
  </head>
  <body>
    <div id="notebook">
      <div class="page left"></div>
      <div class="page right"></div>
      <div id="lines"></div>
      <div id="hand" class="resting"></div>
    </div>
    <div id="status">connecting…</div>
    <script>
      const relayUrl = {json.dumps(relay_url)};
      const statusEl = document.getElementById("status");
      const linesEl = document.getElementById("lines");
      const hand = document.getElementById("hand");

      // Same constants as notebook/layout.py
      const TOP = 20, LINE_H = 8, PER_PAGE = 7;
      const PAGE_X = {{ left: 10, right: 60 }}, PAGE_W = 30;

      const lines = [];
      for (let n = 0; n < PER_PAGE * 2; n++) {{
        const page = n < PER_PAGE ? "left" : "right";
        const row = n % PER_PAGE;
        const div = document.createElement("div");
        div.className = "line";
        div.dataset.page = page;
        div.dataset.lineIndex = String(n);
        div.style.left = PAGE_X[page] + "%";
        div.style.width = PAGE_W + "%";
        div.style.top = (TOP + row * LINE_H) + "%";
        div.style.height = LINE_H + "%";
        const wrapper = document.createElement("div");
        wrapper.className = "text-wrapper";
        const content = document.createElement("div");
        content.className = "line-content";
        wrapper.appendChild(content);
        div.appendChild(wrapper);
        linesEl.appendChild(div);
        lines.push({{ div, wrapper, content }});
      }}

      function easeCss(ease) {{
        if (ease === "power2.out") return "cubic-bezier(0.25, 0.46, 0.45, 0.94)";
        if (ease === "power1.inOut") return "cubic-bezier(0.45, 0.05, 0.55, 0.95)";
        return "cubic-bezier(0.65, 0, 0.35, 1)";
      }}

      function moveHand(msg) {{
        hand.style.transitionDuration = (msg.duration || 0) + "s";
        hand.style.transitionTimingFunction = easeCss(msg.ease);
        hand.style.left = msg.x + "%";
        hand.style.top = msg.y + "%";
        hand.style.transform = `rotate(${{msg.rotation || 0}}deg)`;
      }}

      function setPose(msg) {{
        hand.className = msg.pose === "writing" ? "writing" : "resting";
      }}

      function setText(msg) {{
        const l = lines[msg.line];
        if (!l) return;
        l.content.textContent = msg.text;
      }}

      function strike(msg) {{
        const l = lines[msg.line];
        if (!l) return;
        let s = l.wrapper.querySelector(".strikethrough-line");
        if (!s) {{
          s = document.createElement("div");
          s.className = "strikethrough-line";
          l.wrapper.appendChild(s);
        }}
        s.style.transitionDuration = msg.duration + "s";
        requestAnimationFrame(() => {{ s.style.width = "100%"; }});
      }}

      function clearAll() {{
        for (const l of lines) {{
          l.content.textContent = "";
          const s = l.wrapper.querySelector(".strikethrough-line");
          if (s) s.remove();
        }}
      }}

      moveHand({{ x: 25, y: 30, rotation: 0, duration: 0 }});

      function wsUrl() {{
        const u = new URL("/ws", relayUrl || location.href);
        u.protocol = (u.protocol === "https:") ? "wss:" : "ws:";
        return u.toString();
      }}

      let ws;
      function connect() {{
        statusEl.textContent = `connecting… ${{wsUrl()}}`;
        ws = new WebSocket(wsUrl());
        ws.onopen = () => {{
          statusEl.textContent = "connected";
        }};
        ws.onclose = () => {{
          statusEl.textContent = "disconnected; retrying…";
          setTimeout(connect, 500);
        }};
        ws.onerror = () => {{
          // onclose will handle reconnect
        }};
        ws.onmessage = (ev) => {{
          let msg;
          try {{ msg = JSON.parse(ev.data); }} catch {{ return; }}
          const t = msg.t;
          if (t === "new_subscriber") {{
            statusEl.textContent = `new subscriber: ${{msg.username}}`;
          }} else if (t === "hand") {{
            moveHand(msg);
          }} else if (t === "pose") {{
            setPose(msg);
          }} else if (t === "line_text") {{
            setText(msg);
          }} else if (t === "strike") {{
            strike(msg);
          }} else if (t === "clear") {{
            clearAll();
          }}
        }};
      }}
      connect();
    </script>
  </body>
</html>
"""
