import asyncio
from datetime import datetime
from typing import Annotated, List
from zoneinfo import ZoneInfo

from pydantic import Field

from gemini_client import (
    ClientConfig,
    ConfigurationError,
    Content,
    GeminiClient,
    GenerateContentRequest,
    HandlerRegistry,
    Role,
)

registry = HandlerRegistry()


@registry.tool
def get_time(timezone: Annotated[str, Field(description="IANA timezone name, e.g. 'Europe/London'")] = "UTC") -> str:
    """Return the current local time in the given timezone."""
    return datetime.now(ZoneInfo(timezone)).isoformat(timespec="seconds")


async def main() -> None:
    """
    Main function to run the CLI chat. The history lives here, not in the client.
    """
    print("Welcome to the CLI Chat (Gemini)!")

    try:
        config = ClientConfig.from_env()
    except ConfigurationError as e:
        print(f"Error: {e}")
        return

    client = GeminiClient(config)
    system = Content.from_text("You are a helpful assistant.")
    history: List[Content] = []

    print("\nStart chatting! Type 'exit' or 'quit' to stop.")
    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if not user_input:
            continue

        history.append(Content.from_text(user_input))
        request = GenerateContentRequest(contents=history, system_instruction=system)
        try:
            response = await client.generate_content_with_function_calling(None, request, registry)
            answer = response.text
            print(f"Assistant: {answer}")
            history.append(Content.from_text(answer, role=Role.MODEL))

        except Exception as e:
            history.pop()
            print(f"An error occurred: {e}")


if __name__ == "__main__":
    asyncio.run(main())
