"""Chat with the wildlife bot from the terminal, in-process or over HTTP."""

import argparse
import asyncio
import json
import sys
from urllib import error, request

from wildchat.api.models import ChatData, ChatResponse
from wildchat.routing import get_message_router


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--user-id",
        default="default",
        help="Session identifier used for every message.",
    )
    parser.add_argument(
        "--endpoint",
        help="Optional /api/chat endpoint to POST messages to instead of routing locally.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full response payload instead of only the reply text.",
    )
    return parser.parse_args()


def _post(endpoint: str, payload: dict) -> tuple[int, dict]:
    body = json.dumps(payload).encode("utf-8")
    req = request.Request(
        endpoint, data=body, headers={"Content-Type": "application/json"}
    )
    with request.urlopen(req) as resp:
        charset = resp.headers.get_content_charset("utf-8")
        return resp.status, json.loads(resp.read().decode(charset))


def _ask_endpoint(endpoint: str, message: str, user_id: str) -> dict:
    try:
        _, payload = _post(endpoint, {"message": message, "userId": user_id})
    except error.HTTPError as exc:
        return json.loads(exc.read().decode("utf-8", errors="ignore") or "{}")
    return payload


async def _ask_locally(message: str, user_id: str) -> dict:
    result = await get_message_router().process_message(message, user_id)
    data = ChatData(
        response=result.response,
        topics=result.topics,
        is_llm=result.is_llm,
        in_dialogue_tree=result.in_dialogue_tree,
        follow_up=result.follow_up,
        user_id=user_id,
    )
    return ChatResponse(data=data).model_dump(by_alias=True)


def _render(payload: dict, as_json: bool) -> str:
    if as_json:
        return json.dumps(payload, ensure_ascii=False, indent=2)
    if not payload.get("success"):
        return f"[error] {payload.get('error')}"

    data = payload.get("data") or {}
    line = data.get("response", "")
    follow_up = data.get("followUp")
    if follow_up:
        line = f"{line}\n  ({follow_up})"
    return line


def main() -> int:
    args = parse_args()
    print("Type a message and press enter. Ctrl-D to quit.", file=sys.stderr)

    while True:
        try:
            message = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print(file=sys.stderr)
            return 0

        if not message:
            continue

        if args.endpoint:
            try:
                payload = _ask_endpoint(args.endpoint, message, args.user_id)
            except error.URLError as exc:
                print(f"[endpoint error] {exc}", file=sys.stderr)
                continue
        else:
            payload = asyncio.run(_ask_locally(message, args.user_id))

        print(_render(payload, args.json))


if __name__ == "__main__":
    raise SystemExit(main())
