# src/nicetable/data_table/js_hooks.py
from __future__ import annotations


def js_watch_viewport_width(*, emit_event: str, debounce_ms: int = 100) -> str:
    """Return a script that emits ``{width}`` once now and again after each window resize."""
    return f"""
(() => {{
  try {{
    const emit = () => emitEvent('{emit_event}', {{ width: window.innerWidth }});
    let timer = null;
    window.addEventListener('resize', () => {{
      if (timer) clearTimeout(timer);
      timer = setTimeout(emit, {int(debounce_ms)});
    }});
    emit();
  }} catch (err) {{
    console.warn('[nicetable] viewport watch failed', err);
  }}
}})();
""".strip()
