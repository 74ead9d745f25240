"""
Wrapper script for running the catalog server with uvicorn.
"""

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("catalog:application", factory=True, host="0.0.0.0", port=8000)
