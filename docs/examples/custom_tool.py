import asyncio
from typing import Any, Dict

from gemini_client import (
    ClientConfig,
    CodeExecutionResultPart,
    ExecutableCodePart,
    FileDataPart,
    FunctionCallPart,
    FunctionResponsePart,
    GeminiClient,
    GenerateContentRequest,
    HandlerRegistry,
    InlineDataPart,
    TextPart,
    setup_logging,
)

REQUEST = {
    "contents": [
        {
            "parts": [{"text": "What's the current weather in London, UK?"}],
            "role": "user",
        }
    ],
    "tools": [
        {
            "functionDeclarations": [
                {
                    "name": "get_current_weather",
                    "description": "Get the current weather in a given location",
                    "parameters": {
                        "type": "OBJECT",
                        "properties": {
                            "location": {
                                "type": "string",
                                "description": "The city and state, e.g. 'San Francisco, CA'",
                            }
                        },
                        "required": ["location"],
                    },
                }
            ]
        }
    ],
}


def get_current_weather(args: Dict[str, Any]) -> Dict[str, Any]:
    location = args.setdefault("location", "London, UK")
    return {"weather": f"The current weather in {location} is sunny with a temperature of 20°C."}


async def main() -> None:
    setup_logging()

    config = ClientConfig.from_env()
    client = GeminiClient(config)

    registry = HandlerRegistry()
    registry.register("get_current_weather", get_current_weather)

    request = GenerateContentRequest.model_validate(REQUEST)
    response = await client.generate_content_with_function_calling("gemini-2.5-flash", request, registry)

    match response.first_part():
        case TextPart(text=text):
            print(text)
        case FunctionCallPart():
            print("Function call found")
        case FunctionResponsePart():
            print("Function response found")
        case ExecutableCodePart():
            print("Executable code found")
        case CodeExecutionResultPart():
            print("Code execution result found")
        case InlineDataPart():
            print("Inline data found")
        case FileDataPart():
            print("File data found")


if __name__ == "__main__":
    asyncio.run(main())
