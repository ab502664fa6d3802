from pathlib import Path
from urllib.request import getproxies

import dotenv
from loguru import logger
from pydantic import SecretStr, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from telegram.ext import Application, ContextTypes

dotenv.load_dotenv()


PROJECT_DIR = Path(__file__).parent
LOG_DIR = PROJECT_DIR.joinpath("logs")
DATA_DIR = PROJECT_DIR.joinpath("data")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    TELEGRAM_BOT_API_TOKEN: SecretStr = Field(
        default="", description="Bot API token issued by https://t.me/BotFather"
    )

    OPENAI_API_KEY: SecretStr = Field(
        default="", description="API key used by the translation agent"
    )

    OPENAI_BASE_URL: str = Field(
        default="https://api.openai.com/v1", description="OpenAI compatible API endpoint"
    )

    OPENAI_CHAT_MODEL: str = Field(default="gpt-4o", description="Model used for translation")

    OPENAI_TRANSCRIPTION_MODEL: str = Field(
        default="whisper-1", description="Model used to transcribe voice messages"
    )

    OPENAI_SPEECH_MODEL: str = Field(
        default="tts-1", description="Model used to synthesize voice replies"
    )

    OPENAI_SPEECH_VOICE: str = Field(default="alloy", description="Voice preset for replies")

    STORE_BACKEND: str = Field(
        default="sqlite",
        description="Group config storage backend: `memory`, `file`, `redis` or `sqlite`.",
    )

    FILE_STORE_DIR: Path = Field(
        default=DATA_DIR.joinpath("sessions"),
        description="Directory holding one `group_<chat_id>.json` per group when STORE_BACKEND=file",
    )

    REDIS_URL: str = Field(
        default="redis://localhost:6379", description="Redis connection URL when STORE_BACKEND=redis"
    )

    REDIS_KEY_NAMESPACE: str = Field(
        default="telegram:group", description="Key prefix, keys are stored as `<namespace>:<chat_id>`"
    )

    SQLITE_DATABASE_URL: str = Field(
        default=f"sqlite:///{DATA_DIR.joinpath('bot.db')}",
        description="SQLAlchemy URL of the embedded database when STORE_BACKEND=sqlite",
    )

    HTTP_REQUEST_TIMEOUT: float = Field(
        default=75.0,
        description="Timeout in seconds for Telegram API calls. Voice downloads and uploads "
        "need more than the 5 second library default.",
    )

    AGENT_REQUEST_TIMEOUT: float = Field(
        default=120.0, description="Timeout in seconds for translation agent calls"
    )

    def get_default_application(self) -> Application:
        from transbot.session import GroupContext

        _base_builder = (
            Application.builder()
            .token(self.TELEGRAM_BOT_API_TOKEN.get_secret_value())
            .context_types(ContextTypes(context=GroupContext))
            .concurrent_updates(True)
            .connect_timeout(self.HTTP_REQUEST_TIMEOUT)
            .write_timeout(self.HTTP_REQUEST_TIMEOUT)
            .read_timeout(self.HTTP_REQUEST_TIMEOUT)
        )
        if proxy_url := getproxies().get("http"):
            logger.success(f"Using proxy: {proxy_url}")
            application = _base_builder.proxy(proxy_url).get_updates_proxy(proxy_url).build()
        else:
            application = _base_builder.build()

        return application


settings = Settings()  # type: ignore
