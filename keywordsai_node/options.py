"""Dynamic option loaders for the prompt, version and variable dropdowns.

Each loader takes the partial selection made so far, queries the API and
returns a fresh list of OptionEntry. Network failures propagate unchanged
to the caller.

List endpoints answer either with a bare array or with an object wrapping
the array under one of a few keys. Candidate keys are tried in order and
the first whose value is a list wins; an unrecognised shape yields no
records.
"""

from collections.abc import Sequence
from typing import Any

from keywordsai_node.client import KeywordsAIClient, path_segment
from keywordsai_node.logging_config import get_logger
from keywordsai_node.models.options import OptionEntry
from keywordsai_node.models.prompt import LATEST_VERSION, PromptRecord, PromptVersionRecord

logger = get_logger(__name__)

PROMPT_LIST_KEYS = ("results", "data", "prompts")
VERSION_LIST_KEYS = ("results", "data", "versions")
# The "latest" lookup in list_variables only understands paginated responses.
LATEST_LOOKUP_KEYS = ("results",)

LATEST_OPTION = OptionEntry(name="Latest (Draft)", value=LATEST_VERSION)


def unwrap_records(response: Any, keys: Sequence[str], accept_bare_list: bool = True) -> list[Any]:
    """Extract the record list from a list-endpoint response.

    Args:
        response: Decoded response body
        keys: Wrapper keys to try, in order of precedence
        accept_bare_list: Whether a top-level array counts as the record list

    Returns:
        The records, or an empty list when the shape is not recognised
    """
    if isinstance(response, list):
        return response if accept_bare_list else []
    if isinstance(response, dict):
        for key in keys:
            candidate = response.get(key)
            if isinstance(candidate, list):
                return candidate
    return []


async def list_prompts(client: KeywordsAIClient) -> list[OptionEntry]:
    """List prompts as options labelled by name, falling back to the id."""
    response = await client.get("/prompts/")
    records = [PromptRecord.model_validate(item) for item in unwrap_records(response, PROMPT_LIST_KEYS)]
    logger.debug(f"Loaded {len(records)} prompts")
    return [OptionEntry(name=record.name or record.prompt_id, value=record.prompt_id) for record in records]


async def list_versions(client: KeywordsAIClient, prompt_id: str | None) -> list[OptionEntry]:
    """List the versions of a prompt, preceded by the "latest" alias.

    Returns an empty list without calling the API when no prompt is selected.
    """
    if not prompt_id:
        return []

    response = await client.get(f"/prompts/{path_segment(prompt_id)}/versions/")
    records = [PromptVersionRecord.model_validate(item) for item in unwrap_records(response, VERSION_LIST_KEYS)]
    logger.debug(f"Loaded {len(records)} versions for prompt {prompt_id}")

    options = [
        OptionEntry(name=f"Version {record.version}{' (Live)' if record.readonly else ''}", value=record.version)
        for record in records
    ]
    return [LATEST_OPTION.model_copy(), *options]


async def resolve_latest_version(client: KeywordsAIClient, prompt_id: str) -> str:
    """Translate the "latest" alias into the highest version number.

    Falls back to the alias itself when the API lists no versions.
    """
    response = await client.get(f"/prompts/{path_segment(prompt_id)}/versions/")
    records = unwrap_records(response, LATEST_LOOKUP_KEYS, accept_bare_list=False)
    if not records:
        logger.warning(f"No versions listed for prompt {prompt_id}; using '{LATEST_VERSION}' as the version")
        return LATEST_VERSION
    return str(max(PromptVersionRecord.model_validate(item).version for item in records))


async def list_variables(client: KeywordsAIClient, prompt_id: str | None, version: str | int | None) -> list[OptionEntry]:
    """List the variable names of a prompt version.

    Returns an empty list without calling the API unless both a prompt and
    a version are selected.
    """
    if not prompt_id or version in (None, ""):
        return []

    resolved = str(version)
    if resolved == LATEST_VERSION:
        resolved = await resolve_latest_version(client, prompt_id)
        logger.debug(f"Resolved '{LATEST_VERSION}' to version {resolved} for prompt {prompt_id}")

    response = await client.get(f"/prompts/{path_segment(prompt_id)}/versions/{path_segment(resolved)}/")
    variables = response.get("variables") if isinstance(response, dict) else None
    return [OptionEntry(name=name, value=name) for name in (variables or {})]
