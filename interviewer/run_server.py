import uvicorn

from interviewer.config import Config


def main():
    uvicorn.run(
        "interviewer.main:app",
        host=Config.HOST,
        port=Config.PORT,
        log_level=Config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
