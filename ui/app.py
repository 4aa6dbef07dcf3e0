"""MathRelay Playground -- Gradio page that streams the parse/evaluate stages.

Run:  uv run python -m ui.app
"""

import os
import time

import gradio as gr

from mathrelay.config import config
from mathrelay.pipeline import iter_stages

EXAMPLES = [
    "factorial of 5",
    "derivative of x^3 + 2x",
    "integral of 3x^2",
    "log 100",
    "solve x^2 - 4",
]


def stream_stages(query, delay=None):
    """Yield the accumulated markdown transcript after every stage."""
    delay = config.stream_delay if delay is None else delay
    lines = []
    for i, stage in enumerate(iter_stages(query)):
        if i and stage.event != "done" and delay:
            time.sleep(delay)
        if stage.event == "done":
            break
        if stage.event == "error":
            lines.append(f"**Error:** {stage.data}")
        else:
            lines.append(stage.data)
        yield "\n\n".join(lines)


def build_ui():
    with gr.Blocks(title="MathRelay") as app:
        gr.Markdown("## MathRelay\nAsk in plain words: factorial, log, derivative, integral, solve.")
        with gr.Row():
            msg = gr.Textbox(placeholder="derivative of x^2", show_label=False, scale=1, container=False)
            send_btn = gr.Button("Solve", variant="primary", scale=0)
        out = gr.Markdown()

        gr.Examples(examples=EXAMPLES, inputs=msg)

        msg.submit(stream_stages, msg, out)
        send_btn.click(stream_stages, msg, out)

    return app


if __name__ == "__main__":
    share = os.environ.get("MATHRELAY_SHARE", "").lower() in ("1", "true", "yes")
    build_ui().launch(server_name="0.0.0.0", server_port=7861, share=share)
