"""
Run script to start the FastAPI server (no reload).
"""
import uvicorn


def main():
    """Start the Uvicorn server."""
    print("Starting PWD Registry API...")
    print("API Documentation: http://localhost:8000/docs")
    print("ReDoc: http://localhost:8000/redoc")
    print("-" * 50)

    uvicorn.run(
        "pwd_registry.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,  # No reload for stability
        log_level="info"
    )


if __name__ == "__main__":
    main()
