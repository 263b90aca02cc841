#!/usr/bin/env python3
"""
Smoke test for a running patient API.

Walks the full CRUD cycle against a live server and prints a report:

```
python manage.py runserver &
API_BASE_URL=http://127.0.0.1:8000 python api_smoke.py
```

Exits non-zero if any step returned an unexpected status code.
"""
import json
import os
import sys
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000").rstrip("/")
TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))


@dataclass
class StepResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    error_message: str = ""
    description: str = ""


class PatientAPISmokeTest:
    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.session = requests.Session()
        self.session.headers["Content-Type"] = "application/json"
        self.results: List[StepResult] = []

    @property
    def errors(self) -> List[StepResult]:
        return [r for r in self.results if not r.success]

    def call(self, method: str, endpoint: str, expected_status: int,
             description: str, data: Optional[Dict[str, Any]] = None) -> Optional[requests.Response]:
        """Send one request and record whether it returned ``expected_status``."""
        start_time = time.time()
        try:
            response = self.session.request(method, f"{self.base_url}{endpoint}", json=data, timeout=TIMEOUT)
        except requests.RequestException as e:
            self.results.append(StepResult(False, endpoint, method, 0, time.time() - start_time,
                                           error_message=str(e), description=description))
            print(f"❌ {method} {endpoint} - {e}")
            return None

        response_time = time.time() - start_time
        ok = response.status_code == expected_status
        self.results.append(StepResult(
            success=ok,
            endpoint=endpoint,
            method=method,
            status_code=response.status_code,
            response_time=response_time,
            error_message="" if ok else response.text[:200],
            description=description,
        ))
        mark = "✅" if ok else "❌"
        print(f"{mark} {method} {endpoint} - {response.status_code} ({response_time:.2f}s) {description}")
        return response

    def run(self) -> bool:
        print("🏥 Patient API smoke test against", self.base_url)
        print("=" * 50)

        self.call("GET", "/healthz", 200, "database and schema healthy")
        self.call("GET", "/api/patients", 200, "list patients")

        # Unique name per run so repeated runs don't collide
        name = f"Smoke Test {datetime.now():%Y%m%d%H%M%S}"
        payload = {"name": name, "address": "Dorpsstraat 1", "birth_year": 1990}
        created = self.call("POST", "/api/patients", 201, "create patient", payload)
        if created is None or created.status_code != 201:
            return self.report()
        patient_id = created.json()["id"]
        detail = f"/api/patients/{patient_id}"

        self.call("POST", "/api/patients", 400, "duplicate name and birth year rejected",
                  {**payload, "address": "Other address"})
        self.call("POST", "/api/patients", 400, "birth year out of range rejected",
                  {**payload, "name": f"{name} bis", "birth_year": 1850})
        self.call("GET", detail, 200, "get created patient")
        self.call("PUT", detail, 200, "update address", {**payload, "address": "New address"})
        self.call("DELETE", detail, 204, "delete patient")
        self.call("GET", detail, 404, "deleted patient is gone")
        return self.report()

    def report(self) -> bool:
        total = len(self.results)
        print(f"\n🎯 {total - len(self.errors)}/{total} steps passed")
        for i, error in enumerate(self.errors, 1):
            print(f"{i}. {error.method} {error.endpoint} -> {error.status_code}: {error.error_message}")

        report_path = os.getenv("API_SMOKE_REPORT")
        if report_path:
            with open(report_path, "w", encoding="utf-8") as f:
                json.dump({
                    "timestamp": datetime.now().isoformat(),
                    "base_url": self.base_url,
                    "results": [asdict(r) for r in self.results],
                }, f, ensure_ascii=False, indent=2)
            print(f"📝 report written to {report_path}")
        return not self.errors


def main() -> int:
    return 0 if PatientAPISmokeTest().run() else 1


if __name__ == "__main__":
    sys.exit(main())
