"""
Run the Pizzeria order backend and the order form together.

The form is started in backend submission mode, pointed at the local API.
Run with: python start.py
"""

import os
import signal
import subprocess
import sys
import time
import urllib.request
from pathlib import Path

BACKEND_HOST = os.getenv("API_HOST", "127.0.0.1")
BACKEND_PORT = int(os.getenv("API_PORT", "8000"))
FRONTEND_PORT = int(os.getenv("FRONTEND_PORT", "8501"))
BACKEND_URL = f"http://{BACKEND_HOST}:{BACKEND_PORT}"

PROJECT_ROOT = Path(__file__).parent
processes = []


def backend_command():
    return [
        sys.executable, "-m", "uvicorn", "backend.main:app",
        "--host", BACKEND_HOST,
        "--port", str(BACKEND_PORT),
        "--reload" if os.getenv("DEBUG") else "--no-access-log",
    ]


def frontend_command():
    return [
        sys.executable, "-m", "streamlit", "run", "frontend/app.py",
        "--server.port", str(FRONTEND_PORT),
        "--server.headless", "true",
    ]


def frontend_env(environ=None):
    """Environment for the order form; explicit settings win over the defaults."""
    env = dict(os.environ if environ is None else environ)
    env.setdefault("SUBMISSION_MODE", "backend")
    env.setdefault("API_BASE_URL", BACKEND_URL)
    return env


def _spawn(name, cmd, env=None):
    print(f"[{name}] {' '.join(cmd[2:])}")
    process = subprocess.Popen(cmd, cwd=str(PROJECT_ROOT), env=env)
    processes.append((name, process))
    return process


def backend_ready(timeout=30):
    """Poll the health endpoint until it answers or the timeout passes."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(f"{BACKEND_URL}/api/v1/health", timeout=2) as response:
                if response.status == 200:
                    return True
        except OSError:
            time.sleep(0.5)
    return False


def stop_all(signum=None, frame=None):
    for name, process in processes:
        if process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
    sys.exit(0)


def main():
    signal.signal(signal.SIGINT, stop_all)
    signal.signal(signal.SIGTERM, stop_all)

    _spawn("backend", backend_command())
    if not backend_ready():
        print(f"[backend] no answer from {BACKEND_URL}, stopping")
        stop_all()

    _spawn("frontend", frontend_command(), env=frontend_env())
    print(f"Order form: http://localhost:{FRONTEND_PORT}  API docs: {BACKEND_URL}/docs")

    try:
        while True:
            for name, process in processes:
                if process.poll() is not None:
                    print(f"[{name}] exited with code {process.returncode}")
                    stop_all()
            time.sleep(1)
    except KeyboardInterrupt:
        stop_all()


if __name__ == "__main__":
    main()
