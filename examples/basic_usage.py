"""
Basic usage of the Keywords AI node.

Set KEYWORDSAI_API_KEY before running.
"""

import asyncio

from keywordsai_node import ItemExecutionError, KeywordsAIError, KeywordsAINode


async def example_options(node: KeywordsAINode) -> str | None:
    """Walk the prompt -> version -> variable dropdowns."""
    print("\n=== Dynamic Options ===\n")

    prompts = await node.get_prompts()
    for option in prompts:
        print(f"Prompt: {option.name} ({option.value})")
    if not prompts:
        return None

    prompt_id = str(prompts[0].value)
    versions = await node.get_versions(prompt_id)
    print(f"Versions: {[option.name for option in versions]}")

    variables = await node.get_variables(prompt_id, "latest")
    print(f"Variables: {[option.value for option in variables]}")
    return prompt_id


async def example_batch(node: KeywordsAINode, prompt_id: str | None) -> None:
    """Run a direct gateway call and, if available, a managed prompt call."""
    print("\n=== Batch Execution ===\n")

    items = [
        {
            "resource": "gateway",
            "model": "gpt-4o-mini",
            "systemMessage": "You are a helpful assistant.",
            "messages": {"messageValues": [{"role": "user", "content": "Name three primary colors."}]},
            "additionalFields": {"customerIdentifier": "example-user", "requestBreakdown": True},
        },
    ]
    if prompt_id:
        items.append(
            {
                "resource": "gatewayPrompt",
                "promptId": prompt_id,
                "version": "latest",
                "additionalFields": {"metadata": '{"source": "basic_usage"}'},
            }
        )

    try:
        outputs = await node.execute(items, continue_on_fail=True)
    except ItemExecutionError as e:
        print(f"Batch aborted at item {e.item_index}: {e}")
        return

    for index, output in enumerate(outputs):
        payload = output["json"]
        if "error" in payload:
            print(f"Item {index} failed: {payload['error']}")
        else:
            print(f"Item {index}: {payload.get('choices', [{}])[0].get('message', {}).get('content')}")


async def main():
    try:
        async with KeywordsAINode() as node:
            await node.test_credentials()
            prompt_id = await example_options(node)
            await example_batch(node, prompt_id)
    except KeywordsAIError as e:
        print(f"Keywords AI error: {e}")


if __name__ == "__main__":
    asyncio.run(main())
