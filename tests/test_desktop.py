"""Tests for desktop launcher and autostart entries."""

from water_reminder import desktop
from water_reminder.desktop import (
    DESKTOP_FILE_NAME,
    disable_autostart,
    enable_autostart,
    install_desktop_entry,
    remove_desktop_entry,
)


def _entry(path):
    lines = path.read_text().splitlines()
    assert lines[0] == "[Desktop Entry]"
    return dict(line.split("=", 1) for line in lines[1:] if line)


class TestDesktopEntries:
    def test_install_launcher(self, config, monkeypatch):
        monkeypatch.setattr(desktop.shutil, "which", lambda name: "/usr/local/bin/water-reminder")

        path = install_desktop_entry(config, "/usr/share/pixmaps/water-drop.png")

        assert path == config.applications_dir / DESKTOP_FILE_NAME
        entry = _entry(path)
        assert entry["Exec"] == "/usr/local/bin/water-reminder menu"
        assert entry["Icon"] == "/usr/share/pixmaps/water-drop.png"
        assert entry["Terminal"] == "true"

    def test_launcher_falls_back_to_module(self, config, monkeypatch):
        monkeypatch.setattr(desktop.shutil, "which", lambda name: None)

        entry = _entry(install_desktop_entry(config, "icon"))

        assert entry["Exec"].endswith("-m water_reminder menu")

    def test_autostart_runs_start(self, config, monkeypatch):
        monkeypatch.setattr(desktop.shutil, "which", lambda name: "/usr/bin/water-reminder")

        entry = _entry(enable_autostart(config, "icon"))

        assert entry["Exec"] == "/usr/bin/water-reminder start"
        assert entry["X-GNOME-Autostart-enabled"] == "true"

    def test_remove_entries(self, config):
        install_desktop_entry(config, "icon")
        enable_autostart(config, "icon")

        assert remove_desktop_entry(config) is True
        assert disable_autostart(config) is True
        assert not (config.applications_dir / DESKTOP_FILE_NAME).exists()
        assert not (config.autostart_dir / DESKTOP_FILE_NAME).exists()

    def test_remove_missing_entries(self, config):
        assert remove_desktop_entry(config) is False
        assert disable_autostart(config) is False
