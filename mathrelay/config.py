"""
Configuration for MathRelay.
Values come from the environment (a local .env file is loaded first).
"""
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


@dataclass
class Config:
    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3001
    stream_delay: float = 1.0
    log_level: str = "INFO"

    # MCP tool server
    mcp_transport: str = "stdio"

    # Evaluator
    max_expression_length: int = 500

    # Outbound HTTP
    http_timeout: int = 30
    user_agent: str = "MathRelay/1.0"
    geocode_url: str = "https://nominatim.openstreetmap.org/search"
    weather_url: str = "https://api.openweathermap.org/data/2.5/weather"
    openweather_api_key: str = field(default="", repr=False)

    # Chat-completion demo
    openrouter_url: str = "https://openrouter.ai/api/v1/chat/completions"
    openrouter_api_key: str = field(default="", repr=False)
    openrouter_model: str = "openai/gpt-3.5-turbo"
    math_endpoint: str = "http://localhost:3001/mcp"

    # TLS
    certs_dir: str = "certs"

    def __post_init__(self):
        if self.stream_delay < 0:
            raise ValueError(f"stream_delay must be >= 0, got {self.stream_delay}")
        if self.mcp_transport not in ("stdio", "sse", "streamable-http"):
            raise ValueError(f"Invalid MCP transport: {self.mcp_transport}")

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()
        return cls(
            host=os.getenv("MATHRELAY_HOST", cls.host),
            port=int(os.getenv("MATHRELAY_PORT", str(cls.port))),
            stream_delay=float(os.getenv("STREAM_DELAY", str(cls.stream_delay))),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            mcp_transport=os.getenv("MCP_TRANSPORT", cls.mcp_transport),
            max_expression_length=int(os.getenv("MAX_EXPRESSION_LENGTH", str(cls.max_expression_length))),
            http_timeout=int(os.getenv("HTTP_TIMEOUT", str(cls.http_timeout))),
            user_agent=os.getenv("USER_AGENT", cls.user_agent),
            geocode_url=os.getenv("GEOCODE_URL", cls.geocode_url),
            weather_url=os.getenv("WEATHER_URL", cls.weather_url),
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY", ""),
            openrouter_url=os.getenv("OPENROUTER_URL", cls.openrouter_url),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            openrouter_model=os.getenv("OPENROUTER_MODEL", cls.openrouter_model),
            math_endpoint=os.getenv("MATH_ENDPOINT", cls.math_endpoint),
            certs_dir=os.getenv("CERTS_DIR", cls.certs_dir),
        )


# Global configuration instance
config = Config.from_env()
