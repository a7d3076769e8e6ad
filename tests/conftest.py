"""Shared fixtures: fake HTTP sessions and throwaway projects."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest
import requests
import yaml

from license_cli.config import ProjectLicenseConfig
from license_cli.utils import console

LICENSE_URL = "https://licenses.example.org/bsd-2-clause.txt"

BSD_DOCUMENT = """---
title: BSD 2-Clause License
spdx-id: BSD-2-Clause
---

    BSD 2-Clause License

    Copyright (c) [year], [fullname]
    All rights reserved.

    Redistribution and use in source and binary forms, with or without
    modification, are permitted.
"""


def make_response(body: Union[str, bytes], status: int = 200,
                  content_type: Optional[str] = "text/plain; charset=utf-8",
                  url: str = LICENSE_URL) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.url = url
    response.reason = "OK" if status < 400 else "Error"
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


class FakeSession:
    """Stands in for requests.Session and records every GET."""

    def __init__(self, response: Optional[requests.Response] = None,
                 error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, object]] = []
        self.closed = False

    def get(self, url, timeout=None, **kwargs):
        self.calls.append({"url": url, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _fresh_console():
    console._reset_console()
    yield
    console._reset_console()


@pytest.fixture
def fake_session(monkeypatch: pytest.MonkeyPatch) -> FakeSession:
    """Replace requests.Session used by the fetcher with a FakeSession."""
    session = FakeSession(response=make_response(BSD_DOCUMENT))
    monkeypatch.setattr(requests, "Session", lambda: session)
    return session


def write_config(project_dir: Path, **license_settings) -> Path:
    data = {
        "organization": {"name": "Acme"},
        "inception_year": 2016,
        "license": {"source_url": LICENSE_URL, **license_settings},
    }
    path = project_dir / "license.yml"
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project root containing a license.yml for Acme, incepted 2016."""
    write_config(tmp_path)
    return tmp_path


@pytest.fixture
def acme_config(tmp_path: Path) -> ProjectLicenseConfig:
    return ProjectLicenseConfig(
        organization_name="Acme",
        inception_year=2016,
        license_source_url=LICENSE_URL,
        base_dir=tmp_path,
    )
