import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from trustcheck.article_checker.router import create_router
from trustcheck.core.llm_chains import get_chat_llm

# .env values feed the Azure OpenAI and browser settings
load_dotenv()

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.info("Application starting...")
    try:
        app.state.llm = get_chat_llm()
    except Exception as e:
        app.state.llm = None
        logging.error(f"⚠️ Chat model could not be built at start-up, analysis requests will fail: {e}")
    try:
        yield
    finally:
        logging.info("Application shutting down...")


app = FastAPI(lifespan=lifespan)

app.include_router(create_router(lambda: getattr(app.state, "llm", None)))


@app.get("/")
def read_root():
    return {"message": "Article trust checker is running."}
