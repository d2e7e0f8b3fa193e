from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Tuple
from wsgiref.simple_server import make_server

from mazegame import (
    ChooseExit,
    GameAction,
    GameSession,
    Restart,
    UnknownRoomError,
    load_startup_state,
    resolve_maze_path,
)
from mazegame.loader import MAZE_PATH_ENV

ROOT = Path(__file__).resolve().parent
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

logger = logging.getLogger(__name__)


def html_response(start_response, body: str, status: str = "200 OK"):
    encoded = body.encode("utf-8")
    start_response(
        status,
        [
            ("Content-Type", "text/html; charset=utf-8"),
            ("Content-Length", str(len(encoded))),
        ],
    )
    return [encoded]


def json_response(start_response, payload: Dict[str, object], status: str = "200 OK"):
    encoded = json.dumps(payload).encode("utf-8")
    start_response(
        status,
        [
            ("Content-Type", "application/json"),
            ("Content-Length", str(len(encoded))),
        ],
    )
    return [encoded]


def not_found(start_response):
    start_response("404 Not Found", [("Content-Type", "text/plain"), ("Content-Length", "9")])
    return [b"Not found"]


def method_not_allowed(start_response):
    start_response("405 Method Not Allowed", [("Content-Type", "text/plain"), ("Content-Length", "18")])
    return [b"Method not allowed"]


def bad_request(start_response, message: str):
    return json_response(start_response, {"error": message}, status="400 Bad Request")


def landing_page(state_json: str) -> str:
    template = """<!DOCTYPE html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
  <title>Maze Game</title>
  <style>
    :root {
      color-scheme: dark;
      font-family: 'Segoe UI', system-ui, sans-serif;
      background: #0c111f;
      color: #f5f6fb;
    }
    body {
      margin: 0;
      display: flex;
      min-height: 100vh;
      justify-content: center;
    }
    .app-shell {
      max-width: 640px;
      width: 100%;
      padding: 2.5rem 2rem;
      box-sizing: border-box;
    }
    #description {
      line-height: 1.5;
      margin: 1.5rem 0;
    }
    #choices {
      display: flex;
      flex-direction: column;
      gap: 0.6rem;
    }
    button {
      background: #2b3b5f;
      color: inherit;
      border: 1px solid rgba(255, 255, 255, 0.15);
      padding: 0.6rem 1rem;
      border-radius: 999px;
      cursor: pointer;
      font-size: 1rem;
    }
    button:hover {
      background: #3a4d7a;
    }
  </style>
</head>
<body>
  <div class=\"app-shell\">
    <h1>Maze Game</h1>
    <p id=\"description\"></p>
    <p id=\"finished\" hidden>You reached the end of the maze!</p>
    <div id=\"choices\"></div>
  </div>
  <script id=\"bootstrap-data\" type=\"application/json\">__STATE__</script>
  <script>
    const descriptionEl = document.getElementById('description');
    const finishedEl = document.getElementById('finished');
    const choicesEl = document.getElementById('choices');

    function addButton(label, payload) {
      const button = document.createElement('button');
      button.type = 'button';
      button.textContent = label;
      button.addEventListener('click', () => sendAction(payload));
      choicesEl.appendChild(button);
    }

    function updateView(data) {
      const room = data.room;
      if (!room) {
        descriptionEl.textContent = data.error;
        finishedEl.hidden = true;
        choicesEl.innerHTML = '';
        addButton('Restart', { action: 'restart' });
        return;
      }
      descriptionEl.textContent = room.description;
      finishedEl.hidden = !room.is_end;
      choicesEl.innerHTML = '';
      if (room.is_end) {
        addButton('Restart', { action: 'restart' });
        return;
      }
      for (const exit of room.exits) {
        addButton(exit.label, { action: 'choose_exit', index: exit.index });
      }
    }

    async function sendAction(payload) {
      try {
        const response = await fetch('/api/action', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(payload)
        });
        if (!response.ok && response.status !== 409) {
          throw new Error('Action failed');
        }
        updateView(await response.json());
      } catch (error) {
        console.error(error);
      }
    }

    const bootstrap = document.getElementById('bootstrap-data');
    try {
      updateView(JSON.parse(bootstrap.textContent));
    } catch (error) {
      console.error('Failed to parse bootstrap state', error);
    }
  </script>
</body>
</html>"""

    return template.replace("__STATE__", state_json)


def safe_state_payload(state: Dict[str, object]) -> str:
    payload = json.dumps(state)
    return payload.replace("</", "<\\/")


def parse_action_payload(payload: object) -> Optional[GameAction]:
    if not isinstance(payload, dict):
        return None
    action = payload.get("action")
    if action == "restart":
        return Restart()
    if action == "choose_exit":
        index = payload.get("index")
        if isinstance(index, int) and not isinstance(index, bool):
            return ChooseExit(index)
    return None


def read_json_body(environ) -> object:
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    raw = environ["wsgi.input"].read(length) if length > 0 else b""
    try:
        return json.loads(raw.decode("utf-8") or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None


def current_view(session: GameSession) -> Tuple[Dict[str, object], str]:
    try:
        return session.view_state(), "200 OK"
    except UnknownRoomError as exc:
        logger.warning("Session is in an unknown room: %s", exc)
        lost = {
            "room": None,
            "is_finished": session.state.is_finished,
            "error": f"This exit leads nowhere (no room '{exc.room_id}'). Restart to play again.",
        }
        return lost, "409 Conflict"


def make_app(session: GameSession):
    def app(environ, start_response):
        path = environ.get("PATH_INFO", "/")
        method = environ.get("REQUEST_METHOD", "GET").upper()

        if path == "/":
            if method != "GET":
                return method_not_allowed(start_response)
            view, _ = current_view(session)
            return html_response(start_response, landing_page(safe_state_payload(view)))

        if path == "/api/state":
            if method != "GET":
                return method_not_allowed(start_response)
            view, status = current_view(session)
            return json_response(start_response, view, status=status)

        if path == "/api/action":
            if method != "POST":
                return method_not_allowed(start_response)
            action = parse_action_payload(read_json_body(environ))
            if action is None:
                return bad_request(start_response, "Expected {'action': 'restart'} or {'action': 'choose_exit', 'index': N}")
            try:
                session.apply(action)
            except UnknownRoomError as exc:
                logger.warning("Ignoring %r from unknown room '%s'", action, exc.room_id)
            view, status = current_view(session)
            return json_response(start_response, view, status=status)

        return not_found(start_response)

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    host = os.environ.get("MAZE_HOST", DEFAULT_HOST)
    port = int(os.environ.get("MAZE_PORT", DEFAULT_PORT))
    explicit = bool(os.environ.get(MAZE_PATH_ENV))
    session = GameSession(load_startup_state(resolve_maze_path(ROOT), explicit=explicit))
    with make_server(host, port, make_app(session)) as server:
        logger.info("Serving the maze on http://%s:%d", host, port)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped.")


if __name__ == "__main__":
    main()
