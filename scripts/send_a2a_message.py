#!/usr/bin/env python3
"""Send a JSON-RPC message to a running agent and print the task.

------------------------------------------------------------------------
Usage
------------------------------------------------------------------------

    python scripts/send_a2a_message.py \
        --agent-url http://localhost:8000 \
        --message "My idea is a subscription box for rare indoor plants."

    # Continue a conversation:
    python scripts/send_a2a_message.py --context-id <CONTEXT_ID> \
        --message "What about selling to offices instead?"

    # Print only the agent's reply:
    python scripts/send_a2a_message.py --reply-only --message "..."
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import uuid
from urllib.error import HTTPError
from urllib.request import Request, urlopen


def send_a2a_message(
    agent_url: str,
    agent_id: str,
    message: str,
    context_id: str | None = None,
) -> dict:
    """Send a JSON-RPC message/send to the agent route."""
    url = f"{agent_url.rstrip('/')}/a2a/agent/{agent_id}"
    params: dict = {
        "message": {
            "role": "user",
            "parts": [{"kind": "text", "text": message}],
            "messageId": str(uuid.uuid4()),
        },
    }
    if context_id:
        params["contextId"] = context_id

    payload = json.dumps({
        "jsonrpc": "2.0",
        "id": str(uuid.uuid4()),
        "method": "message/send",
        "params": params,
    }).encode("utf-8")

    request = Request(
        url,
        headers={"Content-Type": "application/json"},
        method="POST",
        data=payload,
    )

    print(f">>> POST {url}", file=sys.stderr)
    try:
        result = urlopen(request, timeout=300).read()
    except HTTPError as e:
        result = e.read()
    return json.loads(result)


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a message to the A2A agent route")
    parser.add_argument("--agent-url", default=os.environ.get("AGENT_URL", "http://localhost:8000"))
    parser.add_argument("--agent-id", default="devilsAdvocateAgent")
    parser.add_argument("--context-id", default=None, help="Conversation to continue")
    parser.add_argument("--message", required=True, help="Idea or plan to critique")
    parser.add_argument("--reply-only", action="store_true", help="Print only the reply text")
    args = parser.parse_args()

    response = send_a2a_message(args.agent_url, args.agent_id, args.message, args.context_id)

    if "error" in response:
        print(json.dumps(response["error"], indent=2), file=sys.stderr)
        sys.exit(1)

    if args.reply_only:
        print(response["result"]["status"]["message"]["parts"][0]["text"])
    else:
        print(json.dumps(response, indent=2))
    print(f"contextId: {response['result']['contextId']}", file=sys.stderr)


if __name__ == "__main__":
    main()
