import uvicorn
from creator_leads.config import settings  # ensures .env is loaded
from creator_leads.utils.log import setup_logger


def main():
    setup_logger()
    uvicorn.run(
        "creator_leads.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=(settings.ENV == "development"),
        log_config=None,  # keep the root logger configured above
    )


if __name__ == "__main__":
    main()
