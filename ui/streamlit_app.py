# Role: Streamlit chat UI.
# - Conversation (ui.conversation) is the only state; this module just renders it and feeds it events.
# - One outstanding request at a time: input is disabled while a reply is awaited.

from __future__ import annotations

import os

import streamlit as st

from backend.config import api_base_url_for
from ui.conversation import Conversation, RenderLine
from ui.relay_client import RelayClient, RelayClientError

APP_ENV = os.getenv("APP_ENV", "development")


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "conversation" not in st.session_state:
        st.session_state["conversation"] = Conversation()
    if "relay" not in st.session_state:
        st.session_state["relay"] = RelayClient(api_base_url_for(APP_ENV))


def conversation() -> Conversation:
    return st.session_state["conversation"]


# ----------------------------
# UI polish
# ----------------------------
def inject_css() -> None:
    st.markdown(
        """
<style>
.block-container { max-width: 800px; padding-top: 2rem; padding-bottom: 2rem; }

/* Timestamp above each message */
.un-ts { font-size: 0.8rem; opacity: 0.6; margin-bottom: 4px; }

/* Collapsed reply placeholder */
.un-collapsed { font-style: italic; opacity: 0.65; }

div[data-testid="stChatInput"] textarea { min-height: 44px; }
</style>
""",
        unsafe_allow_html=True,
    )


# ----------------------------
# Chat
# ----------------------------
def render_line(line: RenderLine) -> None:
    avatar_role = "assistant" if line.collapsible or line.typing else "user"
    with st.chat_message(avatar_role):
        if line.typing:
            st.caption(line.text)
            return

        st.markdown(f'<div class="un-ts">{line.timestamp}</div>', unsafe_allow_html=True)
        if line.collapsed:
            st.markdown(f'<div class="un-collapsed">{line.text}</div>', unsafe_allow_html=True)
        else:
            st.write(line.text)

        if line.collapsible:
            label = "Expand" if line.collapsed else "Collapse"
            # Callbacks run before the next script pass, so a toggle never interrupts an outstanding send.
            st.button(
                label,
                key=f"toggle-{line.index}",
                on_click=conversation().toggle_collapse,
                args=(line.index,),
            )


def render_chat() -> None:
    for line in conversation().view():
        render_line(line)

    if conversation().last_error:
        st.error(conversation().last_error)


def send_pending() -> None:
    # Second half of a submit cycle: runs on the rerun after the user message was appended.
    convo = conversation()
    pending = convo.messages[-1]
    # Key line: no Streamlit call between send and complete/fail; the typing line from view() is the indicator.
    try:
        reply = st.session_state["relay"].send(pending)
    except RelayClientError as e:
        convo.fail(e)
    else:
        convo.complete(reply)
    st.rerun()


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="Unscrolled", layout="centered")
    inject_css()

    st.title("Unscrolled")
    st.caption("Ask anything. Earlier replies collapse when you send a new message.")

    ensure_session()
    render_chat()

    convo = conversation()
    user_input = st.chat_input("Type your message here...", disabled=convo.waiting)

    if convo.waiting:
        send_pending()
        return

    if not user_input:
        return

    convo.set_draft(user_input)
    if convo.begin_submit() is not None:
        st.rerun()


if __name__ == "__main__":
    main()
