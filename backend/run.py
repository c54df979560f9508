#!/usr/bin/env python3
"""
Proximity Food Backend - Run Script
This script starts the FastAPI backend server
"""

import os
import sys
import subprocess
import socket
from pathlib import Path

HOST = "0.0.0.0"
PORT = int(os.environ.get("BACKEND_PORT", "8000"))

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"❌ Error: {error_message}", "red")
        sys.exit(1)

def check_port_open(host, port):
    """Check if a port is open"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(2)
    result = sock.connect_ex((host, port))
    sock.close()
    return result == 0

def main():
    print_colored("🚀 Starting Proximity Food Backend...", "blue")

    # Check if we're in the backend directory
    check_file_exists("app/main.py", "app/main.py not found. Please run this script from the backend directory.")

    # .env is optional, every setting has a default
    if not Path(".env").exists() and not Path("../.env").exists():
        print_colored("ℹ️  No .env file found, using defaults.", "yellow")
        print("Optional variables:")
        print("  OVERPASS_URL=https://overpass-api.de/api/interpreter")
        print("  OVERPASS_TIMEOUT=30")
        print("  DEFAULT_RADIUS_M=1000")
        print("  LOGGER=20")

    # Refuse to start twice on the same port
    if check_port_open("localhost", PORT):
        print_colored(f"❌ Port {PORT} is already in use. Is the backend already running?", "red")
        sys.exit(1)

    # Check if dependencies are installed
    print_colored("🔍 Checking dependencies...", "blue")
    try:
        import fastapi
        import uvicorn
        import httpx
    except ImportError:
        print_colored("❌ Dependencies not installed.", "red")
        print("Installing dependencies...")
        subprocess.run([sys.executable, "-m", "pip", "install", "-e", ".."], check=True)

    # Start the server
    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print(f"📍 Backend will be available at: http://localhost:{PORT}")
    print(f"📍 Restaurants: http://localhost:{PORT}/restaurants?lat=40.7128&lng=-74.006&radius=1000")
    print(f"📍 API Documentation: http://localhost:{PORT}/docs")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    # Run uvicorn with auto-reload for development
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "app.main:app",
            "--reload",
            "--host", HOST,
            "--port", str(PORT)
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Backend server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
