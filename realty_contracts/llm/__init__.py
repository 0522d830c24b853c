"""Language-model access: generative transforms and embeddings."""

from realty_contracts.llm.embeddings import OpenAIEmbedder
from realty_contracts.llm.transform import GenerativeTransform, LLMError, parse_json_text

__all__ = ["GenerativeTransform", "LLMError", "OpenAIEmbedder", "parse_json_text"]
