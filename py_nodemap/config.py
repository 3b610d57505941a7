"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Map construction and presentation settings."""

    # Graph construction
    edge_distance_threshold: float = Field(
        default=160.0, description="Max edge length for document maps"
    )
    plain_edge_distance_threshold: float = Field(
        default=130.0, description="Max edge length for the hardcoded map"
    )
    intersection_shrink_factor: float = Field(
        default=0.99,
        description="Scale applied to segments about their midpoint before crossing tests",
    )

    # Presentation
    node_radius: float = Field(default=10.0, description="Node marker radius")
    edge_stroke_width: float = Field(default=3.0, description="Edge stroke width")
    edge_stroke_color: str = Field(default="#888888", description="Edge stroke color")
    current_node_opacity: float = Field(default=1.0, description="Opacity of the player's node")
    reachable_node_opacity: float = Field(
        default=0.8, description="Opacity of nodes one move away"
    )
    unreachable_node_opacity: float = Field(
        default=0.3, description="Opacity of every other node"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    class Config:
        env_prefix = "NODEMAP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
