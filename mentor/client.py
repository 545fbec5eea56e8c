from __future__ import annotations

"""Terminal chat client.

Holds the conversation history locally and replays it with every request;
the server keeps no session state.
"""

from typing import Dict, List, Optional

import httpx

from config.settings import get_settings


class ChatSession:
    def __init__(
        self,
        endpoint: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 60.0,
    ):
        self.endpoint = endpoint or get_settings().chat_api_url
        self.client = client or httpx.Client(timeout=timeout)
        self.history: List[Dict[str, str]] = []

    def build_request(self, message: str) -> Dict:
        return {"message": message, "conversationHistory": list(self.history)}

    def send(self, message: str) -> str:
        """Send one user turn and return the text to display.

        Both turns are appended to the local history only when the server
        produced a reply text (including the friendly text of a failed
        generation).
        """
        try:
            response = self.client.post(self.endpoint, json=self.build_request(message))
        except httpx.HTTPError as exc:
            raise RuntimeError(f"Chat API call failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise RuntimeError(
                f"Chat API returned a non-JSON body (status {response.status_code})"
            ) from exc

        reply = data.get("response")
        if reply is None:
            return f"Error: {data.get('error') or response.status_code}"

        self.history.append({"role": "user", "content": message})
        self.history.append({"role": "assistant", "content": reply})
        return reply

    def close(self) -> None:
        self.client.close()


def main() -> None:
    session = ChatSession()
    print(f"Connected to {session.endpoint}. Empty line or Ctrl-D to quit.")
    try:
        while True:
            try:
                message = input("You: ").strip()
            except EOFError:
                break
            if not message:
                break
            try:
                print(f"Mentor: {session.send(message)}\n")
            except RuntimeError as exc:
                print(f"[error] {exc}\n")
    finally:
        session.close()


if __name__ == "__main__":
    main()
