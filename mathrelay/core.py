"""Shared core — tool schemas and the chat-completion client."""

import inspect
import json
import typing

import requests

from .config import config as default_config
from .errors import UpstreamError

_PY_TO_JSON = {str: "string", int: "integer", float: "number", bool: "boolean"}


def _property(annotation):
    """JSON Schema property for one parameter; Literal choices become an enum."""
    if typing.get_origin(annotation) is typing.Literal:
        choices = list(typing.get_args(annotation))
        return {"type": _PY_TO_JSON.get(type(choices[0]), "string"), "enum": choices}
    return {"type": _PY_TO_JSON.get(annotation, "string")}


def build_schema(fn, name=None):
    """OpenAI-format tool schema from a function's signature + docstring.

    Parameters with a default are optional; a None default is left out of the schema.
    """
    props = {}
    required = []
    for pname, param in inspect.signature(fn).parameters.items():
        ann = param.annotation if param.annotation != inspect.Parameter.empty else str
        prop = _property(ann)
        if param.default == inspect.Parameter.empty:
            required.append(pname)
        elif param.default is not None:
            prop["default"] = param.default
        props[pname] = prop

    doc = inspect.getdoc(fn) or fn.__name__
    desc = doc.split("\n\n", 1)[1].strip() if "\n\n" in doc else doc.split("\n")[0]

    return {
        "type": "function",
        "function": {
            "name": name or fn.__name__,
            "description": desc,
            "parameters": {
                "type": "object",
                "properties": props,
                "required": required,
            },
        },
    }


def chat_request(messages, tools, cfg=None, model=None):
    """Send a chat-completion request. Returns parsed JSON."""
    cfg = cfg or default_config
    url = cfg.openrouter_url
    if not cfg.openrouter_api_key:
        raise UpstreamError("OPENROUTER_API_KEY is not configured")

    payload = {"model": model or cfg.openrouter_model, "messages": messages}
    if tools:
        payload["tools"] = tools
        payload["tool_choice"] = "auto"
    headers = {"Authorization": f"Bearer {cfg.openrouter_api_key}"}

    try:
        resp = requests.post(url, json=payload, headers=headers, timeout=cfg.http_timeout)
        resp.raise_for_status()
        return resp.json()
    except requests.exceptions.HTTPError as e:
        body = e.response.text[:500]
        raise UpstreamError(f"HTTP {e.response.status_code} from {url}\n{body}")
    except requests.exceptions.ConnectionError as e:
        raise UpstreamError(f"Cannot connect to {url}.\nDetail: {e}")
    except requests.exceptions.Timeout:
        raise UpstreamError(f"Request to {url} timed out ({cfg.http_timeout}s).")
    except requests.exceptions.RequestException as e:
        raise UpstreamError(f"Request to {url} failed: {e}")
    except ValueError:
        raise UpstreamError(f"Non-JSON response from {url}")


def first_tool_call(response):
    """Return (name, arguments) of the first tool call in a chat response, or None."""
    choices = response.get("choices") or [None]
    message = (choices[0] or {}).get("message") or {}
    tool_calls = message.get("tool_calls") or []
    if not tool_calls:
        return None
    fn = tool_calls[0].get("function") or {}
    if not fn.get("name"):
        raise UpstreamError("Tool call without a function name")
    args = fn.get("arguments") or "{}"
    if isinstance(args, str):
        try:
            args = json.loads(args)
        except ValueError as e:
            raise UpstreamError(f"Malformed tool arguments for {fn['name']}: {e}") from e
    if not isinstance(args, dict):
        raise UpstreamError(f"Tool arguments for {fn['name']} must be an object")
    return fn["name"], args
