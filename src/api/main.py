import uvicorn

from src.common import configure_root_logger, get_logger, settings

logger = get_logger(__name__)


def main():
    configure_root_logger()

    logger.info("Запуск Ledger Transfer Service")
    logger.info(f"Окружение: {settings.app_env}")
    logger.info(f"База данных: {settings.database_path}")
    logger.info(f"Адрес: {settings.api_host}:{settings.api_port}")

    uvicorn.run(
        "src.api.api:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="info",
    )


if __name__ == "__main__":
    main()
