import os
import runpy


def test_gunicorn_runs_a_single_thread(monkeypatch):
    monkeypatch.setenv("GUNICORN_THREADS", "8")
    settings = runpy.run_path(
        os.path.join(os.path.dirname(__file__), "..", "gunicorn.conf.py")
    )

    assert settings["workers"] == 1
    assert settings["threads"] == 1
