from fastapi import FastAPI
from app.routes.restaurants_route import router as restaurants_router

app = FastAPI(title="Proximity Food API")
app.include_router(restaurants_router)

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to Proximity Food API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "restaurants": "/restaurants?lat={lat}&lng={lng}&radius={meters}",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Proximity Food API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
