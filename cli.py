# Role: Local developer CLI to chat through the relay without the web UI.
# Drives the same Conversation state machine as the Streamlit app.

from __future__ import annotations

import os

import backend.config
backend.config.load_env()

from ui.conversation import Conversation
from ui.relay_client import RelayClient, RelayClientError


def print_history(convo: Conversation) -> None:
    for line in convo.view():
        marker = f"[{line.index}] " if line.collapsible else ""
        print(f"{marker}{line.timestamp} {line.label}: {line.text}")


def main() -> None:
    # 1) Build a RelayClient for the configured environment
    # 2) Route user input -> Conversation.submit -> print assistant output
    # 3) Local commands never reach the network
    base_url = backend.config.api_base_url_for(os.getenv("APP_ENV", "development"))
    relay = RelayClient(base_url)
    convo = Conversation()

    print("Unscrolled CLI")
    print("Commands: /history, /toggle N (collapse/expand reply N), /health, /exit")
    print(f"relay: {relay.messages_endpoint}")
    print("-" * 50)

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        cmd = user_message.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd == "/history":
            print_history(convo)
            continue

        if cmd.startswith("/toggle"):
            _, _, arg = cmd.partition(" ")
            if not arg.strip().isdigit() or not convo.toggle_collapse(int(arg)):
                print("Usage: /toggle N, where N is the index of an assistant reply (see /history)")
            continue

        if cmd == "/health":
            try:
                print(relay.health())
            except RelayClientError as e:
                print(f"Error: {e}")
            continue

        convo.set_draft(user_message)
        if convo.submit(relay.send):
            print(f"\nAssistant: {convo.messages[-1].content}")
        else:
            print(f"\nError: {convo.last_error}")


if __name__ == "__main__":
    main()
