import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from content_forge.config import Settings, load_settings
from content_forge.llm.client import GenerationClient, TextGenerator
from content_forge.models import ContentType, Length, SessionState, Success, Tone
from content_forge.session import (
    CONFIRMATION_DELAY_SECONDS,
    BufferClipboard,
    SessionController,
    SessionNotFoundError,
    SessionStore,
)

logger = logging.getLogger(__name__)


class SessionUpdate(BaseModel):
    content_type: ContentType | None = None
    prompt: str | None = None
    tone: Tone | None = None
    length: Length | None = None


class SessionResponse(BaseModel):
    session_id: str
    state: SessionState


class CopyResponse(BaseModel):
    copied: bool
    text: str | None
    state: SessionState


UI_HTML = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>AI Content Forge</title>
    <style>
      body { font-family: Arial, sans-serif; margin: 0; background: #0b1220; color: #e6e6e6; }
      .container { max-width: 1100px; margin: 40px auto; padding: 0 24px; }
      header { text-align: center; margin-bottom: 24px; }
      h1 { margin: 0; font-size: 32px; color: #8ab4ff; }
      .muted { color: #9fb0d1; font-size: 14px; }
      .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 24px; }
      .panel { background: #121a2b; border: 1px solid #223252; border-radius: 12px; padding: 20px; }
      .panel h2 { margin-top: 0; font-size: 18px; }
      .type-row { display: flex; gap: 6px; background: #0b1220; padding: 4px; border-radius: 8px; }
      .type-btn { flex: 1; margin: 0; background: transparent; color: #c9d4ea; }
      .type-btn.active { background: #4f7cff; color: white; }
      label { display: block; font-size: 13px; color: #9fb0d1; margin: 14px 0 6px; }
      textarea, select { width: 100%; box-sizing: border-box; background: #0b1220; color: #e6e6e6; border: 1px solid #2b3a5c; border-radius: 8px; padding: 10px; }
      textarea { min-height: 120px; }
      .style-row { display: flex; gap: 16px; }
      .style-row > div { flex: 1; }
      button { margin-top: 12px; padding: 10px 16px; border: 0; border-radius: 8px; background: #4f7cff; color: white; cursor: pointer; }
      button:disabled { opacity: 0.6; cursor: not-allowed; }
      #generateBtn { width: 100%; font-weight: bold; }
      .error { display: none; margin-top: 12px; padding: 10px; border-radius: 8px; background: #3b1620; color: #ff9aa9; font-size: 13px; }
      .output-header { display: flex; align-items: center; justify-content: space-between; }
      .secondary-btn { margin-top: 0; background: #27345a; display: none; }
      pre { white-space: pre-wrap; background: #0b1220; border: 1px solid #2b3a5c; padding: 12px; border-radius: 8px; min-height: 260px; }
    </style>
  </head>
  <body>
    <div class="container">
      <header>
        <h1>AI Content Forge</h1>
        <div class="muted">Your personal AI-powered content creation studio</div>
      </header>
      <div class="grid">
        <div class="panel">
          <h2>1. Define Your Content</h2>
          <div id="typeRow" class="type-row"></div>
          <label for="promptInput">Your Prompt</label>
          <textarea id="promptInput" placeholder='e.g., "A new line of eco-friendly sneakers made from recycled materials."'></textarea>
          <h2 style="margin-top: 18px;">2. Refine Your Style</h2>
          <div class="style-row">
            <div>
              <label for="toneSelect">Tone of Voice</label>
              <select id="toneSelect"></select>
            </div>
            <div>
              <label for="lengthSelect">Content Length</label>
              <select id="lengthSelect"></select>
            </div>
          </div>
          <button id="generateBtn">Generate Content</button>
          <div id="errorBox" class="error"></div>
        </div>
        <div class="panel">
          <div class="output-header">
            <h2>Generated Content</h2>
            <button id="copyBtn" class="secondary-btn">Copy</button>
          </div>
          <pre id="output">Your generated content will appear here.
Fill out the form and click generate!</pre>
        </div>
      </div>
    </div>
    <script>
      const typeRow = document.getElementById("typeRow");
      const promptInput = document.getElementById("promptInput");
      const toneSelect = document.getElementById("toneSelect");
      const lengthSelect = document.getElementById("lengthSelect");
      const generateBtn = document.getElementById("generateBtn");
      const errorBox = document.getElementById("errorBox");
      const copyBtn = document.getElementById("copyBtn");
      const output = document.getElementById("output");
      const placeholder = output.textContent;
      let sessionId = null;
      let confirmationMs = 2000;
      let lastState = null;

      async function api(method, path, body) {
        const res = await fetch(path, {
          method: method,
          headers: { "Content-Type": "application/json" },
          body: body ? JSON.stringify(body) : undefined
        });
        const data = await res.json();
        if (!res.ok) {
          throw new Error(data.detail || res.statusText);
        }
        return data;
      }

      function fillSelect(select, values) {
        values.forEach((value) => {
          const option = document.createElement("option");
          option.value = value;
          option.textContent = value;
          select.appendChild(option);
        });
      }

      function render(state) {
        lastState = state;
        Array.from(typeRow.children).forEach((btn) => {
          btn.classList.toggle("active", btn.dataset.value === state.content_type);
        });
        toneSelect.value = state.tone;
        lengthSelect.value = state.length;
        generateBtn.disabled = state.is_busy;
        generateBtn.textContent = state.is_busy ? "Generating..." : "Generate Content";

        const outcome = state.last_outcome;
        if (outcome && outcome.kind === "failure") {
          errorBox.textContent = outcome.message;
          errorBox.style.display = "block";
        } else {
          errorBox.style.display = "none";
        }
        if (state.is_busy) {
          output.textContent = "Generating...";
        } else if (outcome && outcome.kind === "success") {
          output.textContent = outcome.text;
        } else {
          output.textContent = placeholder;
        }
        copyBtn.style.display = outcome && outcome.kind === "success" && !state.is_busy ? "block" : "none";
        copyBtn.textContent = state.clipboard_confirmed ? "Copied!" : "Copy";
      }

      async function update(fields) {
        const data = await api("PATCH", `/sessions/${sessionId}`, fields);
        render(data.state);
      }

      async function init() {
        const options = await api("GET", "/options");
        confirmationMs = options.confirmation_ms;
        options.content_types.forEach((value) => {
          const btn = document.createElement("button");
          btn.className = "type-btn";
          btn.dataset.value = value;
          btn.textContent = value;
          btn.addEventListener("click", () => update({ content_type: value }));
          typeRow.appendChild(btn);
        });
        fillSelect(toneSelect, options.tones);
        fillSelect(lengthSelect, options.lengths);
        const data = await api("POST", "/sessions");
        sessionId = data.session_id;
        render(data.state);
      }

      promptInput.addEventListener("change", () => update({ prompt: promptInput.value }));
      toneSelect.addEventListener("change", () => update({ tone: toneSelect.value }));
      lengthSelect.addEventListener("change", () => update({ length: lengthSelect.value }));

      generateBtn.addEventListener("click", async () => {
        await update({ prompt: promptInput.value });
        render(Object.assign({}, lastState, { is_busy: true, last_outcome: null, clipboard_confirmed: false }));
        try {
          const data = await api("POST", `/sessions/${sessionId}/generate`);
          render(data.state);
        } catch (err) {
          const data = await api("GET", `/sessions/${sessionId}`);
          render(data.state);
        }
      });

      copyBtn.addEventListener("click", async () => {
        const data = await api("POST", `/sessions/${sessionId}/copy`);
        if (data.copied && navigator.clipboard) {
          await navigator.clipboard.writeText(data.text);
        }
        render(data.state);
        setTimeout(async () => {
          const latest = await api("GET", `/sessions/${sessionId}`);
          render(latest.state);
        }, confirmationMs + 50);
      });

      window.addEventListener("beforeunload", () => {
        if (sessionId) {
          fetch(`/sessions/${sessionId}`, { method: "DELETE", keepalive: true });
        }
      });

      init().catch((err) => {
        errorBox.textContent = err.message;
        errorBox.style.display = "block";
      });
    </script>
  </body>
</html>
"""


def create_app(
    settings: Settings | None = None,
    generator: TextGenerator | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    if generator is None:
        generator = GenerationClient(
            api_key=settings.api_key,
            model=settings.model,
            base_url=settings.base_url,
        )
    store = SessionStore(
        lambda: SessionController(generator, BufferClipboard()),
        idle_timeout=settings.session_idle_seconds,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        store.close_all()

    app = FastAPI(title="AI Content Forge", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.sessions = store

    def _session(session_id: str) -> SessionController:
        try:
            return store.get(session_id)
        except SessionNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.get("/")
    def root() -> dict:
        return {"status": "ok", "message": "AI Content Forge is running"}

    @app.get("/ui", response_class=HTMLResponse)
    def ui() -> str:
        return UI_HTML

    @app.get("/options")
    def options() -> dict:
        defaults = SessionState()
        return {
            "content_types": [c.value for c in ContentType],
            "tones": [t.value for t in Tone],
            "lengths": [length.value for length in Length],
            "defaults": {
                "content_type": defaults.content_type.value,
                "tone": defaults.tone.value,
                "length": defaults.length.value,
            },
            "confirmation_ms": int(CONFIRMATION_DELAY_SECONDS * 1000),
        }

    @app.post("/sessions")
    async def create_session() -> SessionResponse:
        session_id, controller = store.create()
        return SessionResponse(session_id=session_id, state=controller.snapshot())

    @app.get("/sessions/{session_id}")
    async def get_session(session_id: str) -> SessionResponse:
        controller = _session(session_id)
        return SessionResponse(session_id=session_id, state=controller.snapshot())

    @app.patch("/sessions/{session_id}")
    async def update_session(session_id: str, update: SessionUpdate) -> SessionResponse:
        controller = _session(session_id)
        if update.content_type is not None:
            controller.set_content_type(update.content_type)
        if update.prompt is not None:
            controller.set_prompt(update.prompt)
        if update.tone is not None:
            controller.set_tone(update.tone)
        if update.length is not None:
            controller.set_length(update.length)
        return SessionResponse(session_id=session_id, state=controller.snapshot())

    @app.post("/sessions/{session_id}/generate")
    async def generate(session_id: str) -> SessionResponse:
        controller = _session(session_id)
        if controller.is_busy:
            logger.info("Generate rejected, session %s is busy", session_id)
            raise HTTPException(
                status_code=409, detail="A generation is already in progress."
            )
        await controller.submit()
        return SessionResponse(session_id=session_id, state=controller.snapshot())

    @app.post("/sessions/{session_id}/copy")
    async def copy(session_id: str) -> CopyResponse:
        controller = _session(session_id)
        copied = controller.copy()
        outcome = controller.state.last_outcome
        text = outcome.text if copied and isinstance(outcome, Success) else None
        return CopyResponse(copied=copied, text=text, state=controller.snapshot())

    @app.delete("/sessions/{session_id}")
    async def delete_session(session_id: str) -> dict:
        try:
            store.close(session_id)
        except SessionNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"status": "closed", "session_id": session_id}

    return app
