import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


class CatalogConfig(BaseModel):
    """Configuration for the product store connection and the operation router."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    # DynamoDB specific settings
    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Table configuration
    product_table: str = Field(
        default_factory=lambda: os.getenv("PRODUCT_TABLE", "products"),
        description="Name of the product table, as provisioned"
    )

    table_prefix: str = Field(
        default_factory=lambda: os.getenv("DYNAMODB_TABLE_PREFIX", ""),
        description="Prefix to add to the product table name"
    )

    category_index_name: str = Field(
        default_factory=lambda: os.getenv("PRODUCT_CATEGORY_INDEX", "CategoryIndex"),
        description="Name of the GSI keyed by product category"
    )

    page_size: int = Field(
        default_factory=lambda: os.getenv("PRODUCT_PAGE_SIZE", "100"),
        validate_default=True,
        description="Items requested per page for scans and index queries"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of botocore retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Request timeout in seconds"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, staging, prod, test)"
    )

    # Router settings
    unknown_operation_policy: str = Field(
        default_factory=lambda: os.getenv("UNKNOWN_OPERATION_POLICY", "null"),
        description="What the router does with an unknown operation: 'null' returns None, 'error' raises"
    )

    require_identity_for_mutations: bool = Field(
        default_factory=lambda: _env_flag("REQUIRE_IDENTITY_FOR_MUTATIONS"),
        description="Reject create/update/delete requests that carry no caller identity"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: _env_flag("CATALOG_DEBUG_LOGGING"),
        description="Enable debug logging for store and router operations"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('product_table')
    @classmethod
    def validate_product_table(cls, v):
        if not v:
            raise ValueError("Product table name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'staging', 'prod', 'test']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('unknown_operation_policy')
    @classmethod
    def validate_unknown_operation_policy(cls, v):
        valid_policies = ['null', 'error']
        if v not in valid_policies:
            raise ValueError(f"Unknown operation policy must be one of: {valid_policies}")
        return v

    @field_validator('page_size')
    @classmethod
    def validate_page_size(cls, v):
        if v < 1:
            raise ValueError("Page size must be at least 1")
        return v

    def get_table_name(self) -> str:
        """Get the full product table name.

        The deployed table name is passed through PRODUCT_TABLE as provisioned,
        so only the optional prefix is applied.

        Returns:
            Full table name
        """
        if self.table_prefix:
            return f"{self.table_prefix}{self.product_table}"
        return self.product_table

    @classmethod
    def from_env(cls) -> 'CatalogConfig':
        """Create configuration from environment variables.

        Returns:
            CatalogConfig instance
        """
        return cls()

    model_config = ConfigDict(
        validate_assignment=True
    )
