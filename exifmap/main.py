from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exifmap import config
from exifmap.logging_setup import init_logging
from exifmap.routers.inspect_images import router as images_router


def create_app() -> FastAPI:
	init_logging(config.LOG_DIR, config.LOG_LEVEL)
	app = FastAPI(title="Image Location Map - Metadata API", version="0.1.0")

	# CORS (restrict via CORS_ORIGINS in production)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=config.CORS_ORIGINS,
		allow_credentials=False,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	# Routers
	app.include_router(images_router)

	@app.get("/health", summary="Liveness probe")
	def health():
		return {"status": "ok"}

	return app


app = create_app()


if __name__ == "__main__":
	# Local dev server: uvicorn exifmap.main:app --reload
	import uvicorn

	uvicorn.run("exifmap.main:app", host=config.HOST, port=config.PORT, reload=config.DEBUG)
