import subprocess
import sys


def _help(*args):
    proc = subprocess.run(
        [sys.executable, "-m", "smartq.app", *args, "-h"],
        capture_output=True,
        text=True,
        check=False,
    )
    return proc.returncode, proc.stdout + proc.stderr


def test_app_help_runs():
    code, out = _help()
    assert code == 0
    assert "main entrypoint" in out
    assert "server" in out
    assert "customer" in out
    assert "owner" in out


def test_server_help_runs():
    code, out = _help("server")
    assert code == 0
    assert "mqtt-host" in out
    assert "namespace" in out


def test_customer_help_is_forwarded():
    code, out = _help("customer")
    assert code == 0
    assert "Customer client" in out
    assert "join" in out
    assert "watch" in out


def test_owner_help_is_forwarded():
    code, out = _help("owner")
    assert code == 0
    assert "analytics" in out
    assert "update-salon" in out
    assert "activate-offer" in out
