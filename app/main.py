import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from app.config import settings

# Import routers
from app.routers import chatbot, resumes

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="API",
    description="FastAPI backend that collects chatbot resume data and saves it to Supabase.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chatbot.router, prefix="/api/v1", tags=["Chatbot Resume"])
app.include_router(resumes.router, prefix="/api/v1", tags=["Saved Resumes"])

@app.get("/")
async def root():
    return {"message": "Resume Builder API is running. Use endpoints under /api/v1/"}


# ✅ Local development runner
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="127.0.0.1", port=8000, reload=True)
