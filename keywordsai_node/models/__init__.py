from keywordsai_node.models.conversation import ConversationMessage, DeclaredMessage, Role
from keywordsai_node.models.options import OptionEntry
from keywordsai_node.models.parameters import AdditionalFields, NodeParameters, VariableAssignment
from keywordsai_node.models.prompt import LATEST_VERSION, PromptRecord, PromptReference, PromptVersionRecord
from keywordsai_node.models.request import GatewayRequestBody, PromptRequestBody, RequestBody, ResourceSelection

__all__ = [
    "AdditionalFields",
    "ConversationMessage",
    "DeclaredMessage",
    "GatewayRequestBody",
    "LATEST_VERSION",
    "NodeParameters",
    "OptionEntry",
    "PromptRecord",
    "PromptReference",
    "PromptRequestBody",
    "PromptVersionRecord",
    "RequestBody",
    "ResourceSelection",
    "Role",
    "VariableAssignment",
]
