"""
Configuration management for sales_etl.

Uses pydantic-settings for environment variable loading and validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SALES_ETL_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # SQL Server data warehouse
    db_server: str = Field(default="localhost", description="SQL Server hostname")
    db_name: str = Field(default="sales_dw", description="Database name")
    db_driver: str = Field(
        default="ODBC Driver 18 for SQL Server",
        description="ODBC driver name",
    )
    db_trusted_connection: bool = Field(
        default=True,
        description="Use Windows authentication",
    )
    db_username: str | None = Field(default=None, description="SQL username (if not trusted)")
    db_password: str | None = Field(default=None, description="SQL password (if not trusted)")
    db_schema: str = Field(default="dw", description="Schema holding the Dim* tables")

    # Data directories
    data_dir: Path = Field(default=Path("data"), description="Root data directory")

    # Sources
    api_url: str | None = Field(default=None, description="Sales API endpoint (plain source)")
    api_timeout: float = Field(default=30.0, gt=0, description="Sales API timeout in seconds")

    # Loaders
    loader_backend: Literal["parquet", "sqlserver"] = Field(
        default="parquet",
        description="Where dimension loaders persist records",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def csv_dir(self) -> Path:
        """Directory holding the CSV exports read by the enriched source."""
        return self.data_dir / "csv"

    @property
    def warehouse_dir(self) -> Path:
        """Directory for Parquet dimension tables."""
        return self.data_dir / "warehouse"

    def connection_string(self) -> str:
        """Build connection string for mssql-python.

        Format: SERVER=host;DATABASE=db;UID=user;PWD=pass;...
        """
        parts = [
            f"SERVER={self.db_server}",
            f"DATABASE={self.db_name}",
        ]
        if self.db_trusted_connection:
            parts.append("Trusted_Connection=yes")
        else:
            if self.db_username:
                parts.append(f"UID={self.db_username}")
            if self.db_password:
                parts.append(f"PWD={self.db_password}")
        parts.append("TrustServerCertificate=yes")
        parts.append("Encrypt=yes")
        return ";".join(parts)


# Global settings instance
settings = Settings()
