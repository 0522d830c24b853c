"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (feedback + search history)
    DATABASE_URL: str = "sqlite+aiosqlite:///./realty_contracts.db"

    # MinIO / S3 (uploaded contract documents)
    S3_ENDPOINT: str = "http://localhost:9000"
    S3_ACCESS_KEY: str = "minioadmin"
    S3_SECRET_KEY: str = "minioadmin"
    S3_BUCKET_UPLOADS: str = "uploads"

    # OpenAI
    OPENAI_API_KEY: str = ""
    MODEL_NAME: str = "gpt-4o"
    EMBEDDING_MODEL: str = "text-embedding-3-small"
    LLM_TIMEOUT_S: int = 60
    LLM_MAX_RETRIES: int = 3
    LLM_MAX_TOKENS: int = 4000

    # Vector store: 'supabase' or 'memory'
    VECTOR_STORE_BACKEND: str = "supabase"
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None
    VECTOR_TABLE_NAME: str = "contract_embeddings"
    VECTOR_QUERY_NAME: str = "match_documents"

    # Workflow defaults (merged under caller-supplied options)
    WORKFLOW_INCLUDE_SIMILAR_CONTRACTS: bool = True
    WORKFLOW_VALIDATE_RESULTS: bool = True
    WORKFLOW_MAX_RETRIES: int = 3
    WORKFLOW_CALL_TIMEOUT_S: Optional[float] = None

    # Document processing
    CHUNK_SIZE: int = 1000
    CHUNK_OVERLAP: int = 200
    PDF_MAX_FILE_SIZE_MB: int = 25
    PDF_MAX_PAGES: int = 100

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


# Global settings instance
settings = Settings()
