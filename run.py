#!/usr/bin/env python3
"""Run script for the SoilReport users API."""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "soilreport.api.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        reload=os.getenv("RELOAD", "False").lower() == "true",
    )
