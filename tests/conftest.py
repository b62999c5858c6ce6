"""
Shared test fixtures for student contacts tests.
"""
import os
import socket
import threading

import pytest
from unittest.mock import patch

from contacts.config.settings import Settings, get_settings
from contacts.models.schemas import StudentRecord


def _student(id, name, roll_number, department, accommodation="Hosteller"):
    slug = name.lower().replace(" ", ".")
    return {
        "id": id,
        "name": name,
        "rollNumber": roll_number,
        "department": department,
        "email": f"{slug}@college.edu",
        "address": f"{id} College Road",
        "labName": f"{department} Lab",
        "accommodation": accommodation,
    }


# Server order, deliberately unsorted
SAMPLE_STUDENTS = [
    _student(1, "Harish Kumar", "CS2202", "CSE"),
    _student(2, "bhavya Iyer", "EC2203", "ECE", "DayScholar"),
    _student(3, "Esha Gupta", "CS2208", "CSE", "DayScholar"),
    _student(4, "Aarav Sharma", "CS2205", "CSE"),
    _student(5, "Gauri Menon", "ME2207", "MECH"),
    _student(6, "Charan Reddy", "CS2201", "CSE", "DayScholar"),
    _student(7, "Farhan Ali", "EC2206", "ECE"),
    _student(8, "Divya Nair", "ME2204", "MECH", "DayScholar"),
]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings independent of the host environment."""
    with patch.dict(os.environ, {}, clear=True):
        return Settings(_env_file=None)


@pytest.fixture
def student_payloads():
    """Raw student dicts as the backend sends them."""
    return [dict(s) for s in SAMPLE_STUDENTS]


@pytest.fixture
def students(student_payloads):
    """Parsed StudentRecord objects in server order."""
    return [StudentRecord.model_validate(s) for s in student_payloads]


def _handle(handler, conn, stop):
    try:
        handler(conn, stop)
    except OSError:
        pass
    finally:
        conn.close()


@pytest.fixture
def local_server():
    """Start a raw TCP server on localhost with a per-connection handler.

    The handler receives ``(conn, stop)``; the fixture returns the API base URL.
    """
    servers = []

    def start(handler):
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        sock.settimeout(0.1)
        stop = threading.Event()

        def serve():
            while not stop.is_set():
                try:
                    conn, _ = sock.accept()
                except socket.timeout:
                    continue
                except OSError:
                    return
                threading.Thread(target=_handle, args=(handler, conn, stop), daemon=True).start()

        threading.Thread(target=serve, daemon=True).start()
        servers.append((sock, stop))
        host, port = sock.getsockname()
        return f"http://{host}:{port}/api"

    yield start

    for sock, stop in servers:
        stop.set()
        sock.close()


@pytest.fixture
def unused_port():
    """A localhost port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
