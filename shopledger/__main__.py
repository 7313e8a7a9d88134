import uvicorn

from shopledger.config import Config


def main():
    uvicorn.run("shopledger.main:app", host=Config.HOST, port=Config.PORT)


if __name__ == "__main__":
    main()
