"""Tests for NavigationService — breadcrumb navigation."""

from taxctl.domain.state import SetConfig
from taxctl.infrastructure.workspace import Workspace
from taxctl.services.domains import DomainService
from taxctl.services.navigation import NavigationService


def _grow(ws: Workspace) -> None:
    service = DomainService(ws)
    service.add("Optics", at=("Physics",))
    service.add("Lasers", at=("Physics", "Optics"))


class TestShow:
    def test_home(self, seeded: Workspace) -> None:
        result = NavigationService(seeded).show()
        assert result.op == "location"
        assert result.data["path"] == "/"
        assert result.data["current"] is None
        assert result.data["breadcrumbs"] == [{"level": 0, "label": "Home"}]
        assert result.data["domains"] == ["Physics", "Biology", "Chemistry"]
        assert result.data["documents"] == []
        assert result.data["can_descend"] is True

    def test_before_setup(self, workspace: Workspace) -> None:
        result = NavigationService(workspace).show()
        assert result.ok
        assert result.data["domains"] == []


class TestSelect:
    def test_descends(self, seeded: Workspace) -> None:
        _grow(seeded)
        nav = NavigationService(seeded)
        nav.select("Physics")
        result = nav.select("Optics")
        assert result.op == "navigate"
        assert result.data["path"] == "Physics/Optics"
        assert result.data["current"] == "Optics"
        assert result.data["domains"] == ["Lasers"]
        assert [c["label"] for c in result.data["breadcrumbs"]] == ["Home", "Physics", "Optics"]
        assert seeded.state.current_path == ("Physics", "Optics")

    def test_unknown_name(self, seeded: Workspace) -> None:
        result = NavigationService(seeded).select("Nope")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail["available"] == ["Physics", "Biology", "Chemistry"]
        assert seeded.state.current_path == ()

    def test_max_depth(self, seeded: Workspace) -> None:
        _grow(seeded)
        seeded.dispatch(SetConfig({"max_depth": 1}))
        nav = NavigationService(seeded)
        assert nav.select("Physics").data["can_descend"] is False
        result = nav.select("Optics")
        assert result.error is not None
        assert result.error.code == "MAX_DEPTH_REACHED"

    def test_requires_setup(self, workspace: Workspace) -> None:
        result = NavigationService(workspace).select("Physics")
        assert result.error is not None
        assert result.error.code == "SETUP_REQUIRED"


class TestUp:
    def test_to_level(self, seeded: Workspace) -> None:
        _grow(seeded)
        nav = NavigationService(seeded)
        nav.go(("Physics", "Optics", "Lasers"))
        assert nav.up(1).data["path"] == "Physics"

    def test_home_by_default(self, seeded: Workspace) -> None:
        _grow(seeded)
        nav = NavigationService(seeded)
        nav.go(("Physics", "Optics"))
        assert nav.up().data["path"] == "/"

    def test_past_end_clamps(self, seeded: Workspace) -> None:
        nav = NavigationService(seeded)
        nav.select("Physics")
        result = nav.up(7)
        assert result.ok
        assert result.data["path"] == "Physics"


class TestGo:
    def test_jump(self, seeded: Workspace) -> None:
        _grow(seeded)
        result = NavigationService(seeded).go(("Physics", "Optics"))
        assert result.data["domains"] == ["Lasers"]

    def test_root(self, seeded: Workspace) -> None:
        nav = NavigationService(seeded)
        nav.select("Physics")
        assert nav.go(()).data["path"] == "/"

    def test_unreachable(self, seeded: Workspace) -> None:
        result = NavigationService(seeded).go(("Physics", "Nope"))
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert seeded.state.current_path == ()
