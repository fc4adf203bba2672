"""Run a quick smoke test against the app.

Uses FastAPI's TestClient to hit the health check and list the stored
schools, printing status codes and payloads.
"""

import sys
import os

# Ensure the repository root is on sys.path so `school_api` can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient
from school_api.main import app


def run_testclient():
    client = TestClient(app)
    for path in ('/health', '/api/schooldata'):
        resp = client.get(path)
        print(path, 'STATUS:', resp.status_code)
        try:
            print('JSON:', resp.json())
        except ValueError:
            print('CONTENT:', resp.text)


if __name__ == '__main__':
    run_testclient()
