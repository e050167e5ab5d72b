import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("TASKBOARD_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


@dataclass
class Config:
    environment: str
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    log_level: str
    facebook_app_id: str | None
    facebook_app_secret: str | None
    facebook_graph_url: str

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ["DATABASE_URL"],
            jwt_secret=os.environ.get("JWT_SECRET", "dev-change-this-secret"),
            jwt_algorithm=os.environ.get("JWT_ALG", "HS256"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            facebook_app_id=os.environ.get("FACEBOOK_APP_ID"),
            facebook_app_secret=os.environ.get("FACEBOOK_APP_SECRET"),
            facebook_graph_url=os.environ.get(
                "FACEBOOK_GRAPH_URL", "https://graph.facebook.com"
            ),
        )


config = Config.from_env()
