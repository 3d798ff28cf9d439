"""Examples of basic promptclient usage.

Requires OPENAI_API_KEY in the environment (or in a .env file).
"""

import json
from typing import Annotated

from pydantic import BaseModel, Field

from promptclient import ContentParseError, PromptClient, query


class Joke(BaseModel):
    body: Annotated[str, Field(description="The setup of the joke")]
    punchline: Annotated[str, Field(description="The punchline")]


# Example 1: Untyped query
async def example_untyped():
    """Plain text answer from the first choice."""
    print("=" * 60)
    print("Example 1: Untyped Query")
    print("=" * 60)

    untyped: str = await query("Tell me a joke")
    print(untyped)
    print()

    # Output:
    #
    # Why don't skeletons fight each other?
    # They don't have the guts.


# Example 2: Typed query
async def example_typed():
    """The schema drives both the instruction sent to the model and the validation."""
    print("=" * 60)
    print("Example 2: Typed Query")
    print("=" * 60)

    typed = await query("Tell me a joke", schema=Joke)
    print(json.dumps(typed.model_dump(), indent=2))
    print()

    # Output:
    #
    # {
    #   "body": "Why don't skeletons fight each other?",
    #   "punchline": "They don't have the guts."
    # }


# Example 3: Handling output that does not match the schema
async def example_parse_failure():
    """try_query returns a result object instead of raising."""
    print("=" * 60)
    print("Example 3: Result Handling")
    print("=" * 60)

    client = PromptClient()
    result = await client.try_query(
        "Tell me a joke",
        system_prompt="You are a comedian who keeps answers short.",
        openai_config={"temperature": 0.7},
        schema=Joke,
    )
    if result.ok:
        print(f"Punchline: {result.value.punchline}")
    else:
        print(result.diagnostic)

    try:
        await client.query("Tell me a joke", schema=list[int])
    except ContentParseError as e:
        print(f"Model output did not match list[int]: {e.content!r}")
    print()


async def main():
    await example_untyped()
    await example_typed()
    await example_parse_failure()


if __name__ == "__main__":
    import asyncio

    asyncio.run(main())
