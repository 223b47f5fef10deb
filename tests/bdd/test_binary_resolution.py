"""Step definitions for pj binary resolution feature."""

import sys

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from pj.domain.exceptions import PjError, RegistryError

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="relies on POSIX permissions")

FEATURE = "../features/binary_resolution.feature"


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Resolution")
@scenario(FEATURE, "Override takes precedence over every other source")
def test_override_precedence():
    """Test override takes precedence over every other source."""
    pass


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Resolution")
@scenario(FEATURE, "Invalid override is fatal")
def test_invalid_override_fatal():
    """Test invalid override is fatal."""
    pass


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Resolution")
@scenario(FEATURE, "Incompatible global binary is ignored")
def test_incompatible_global_ignored():
    """Test incompatible global binary is ignored."""
    pass


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Install")
@scenario(FEATURE, "First use downloads the highest compatible release")
def test_first_use_downloads():
    """Test first use downloads the highest compatible release."""
    pass


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Update")
@scenario(FEATURE, "A due update check installs a newer compatible release")
def test_due_update_installs():
    """Test a due update check installs a newer compatible release."""
    pass


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Update")
@scenario(FEATURE, "A failed update check falls back to the cached binary")
def test_failed_update_falls_back():
    """Test a failed update check falls back to the cached binary."""
    pass


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Install")
@scenario(FEATURE, "No compatible release is reported with the versions seen")
def test_no_compatible_release():
    """Test no compatible release is reported with the versions seen."""
    pass


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.BinaryManager.Cache")
@scenario(FEATURE, "Clearing the cache leaves no binary available")
def test_clear_cache():
    """Test clearing the cache leaves no binary available."""
    pass


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def context():
    """Shared context for passing state between steps."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------


@given(parsers.parse('PJ_BINARY_PATH points to a working pj "{version}"'))
def given_working_override(context: dict, harness, tmp_path, version: str):
    override = harness.make_binary(tmp_path / "override" / "pj", version)
    harness.override.set_path(override)
    context["override"] = override


@given("PJ_BINARY_PATH points to a missing file")
def given_missing_override(harness, tmp_path):
    harness.override.set_path(tmp_path / "missing" / "pj")


@given(parsers.parse('a pj "{version}" is on PATH'))
def given_global_binary(harness, tmp_path, version: str):
    harness.locator.set_path(harness.make_binary(tmp_path / "usr" / "bin" / "pj", version))


@given(parsers.parse('the registry publishes "{versions}"'))
def given_published(harness, versions: str):
    harness.publish(*[v.strip() for v in versions.split(",")])


@given(parsers.parse('a cached pj "{version}" last checked {days:d} days ago'))
def given_cached(harness, version: str, days: int):
    harness.seed_cache(version, checked_days_ago=days)


@given("the release registry is unreachable")
def given_registry_down(harness):
    harness.registry.set_exception(
        RegistryError("Failed to reach release registry: connection refused")
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------


@when("I resolve the pj binary")
def resolve_binary(context: dict, harness):
    """Execute resolution, capturing any error."""
    try:
        context["path"] = harness.manager.resolve_binary_path()
        context["error"] = None
    except PjError as e:
        context["path"] = None
        context["error"] = e


@when("I clear the cache")
def clear_cache(harness):
    harness.manager.purge_cache()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------


@then("the resolved binary is the override")
def resolved_is_override(context: dict):
    assert context["error"] is None, f"Resolution failed: {context['error']}"
    assert context["path"] == context["override"]


@then("the resolved binary is the cached binary")
def resolved_is_cached(context: dict, harness):
    assert context["error"] is None, f"Resolution failed: {context['error']}"
    assert context["path"] == harness.cached_path


@then("the release registry was not queried")
def registry_not_queried(harness):
    assert harness.registry.calls == []


@then(parsers.parse('resolution fails with "{text}"'))
def resolution_fails(context: dict, text: str):
    assert context["error"] is not None, "Expected resolution to fail"
    assert text in str(context["error"]), (
        f"Expected '{text}' in error message, got: {context['error']}"
    )


@then("nothing was downloaded")
def nothing_downloaded(harness):
    assert harness.downloads == []


@then(parsers.parse('"{asset}" was downloaded once'))
def downloaded_once(harness, asset: str):
    assert harness.downloads == [asset]


@then(parsers.parse('the cache metadata records version "{version}"'))
def metadata_version(harness, version: str):
    assert harness.metadata.metadata is not None
    assert harness.metadata.metadata.version == version


@then("the status reports no available binary")
def status_unavailable(harness):
    status = harness.manager.get_status()
    assert status.available is False
    assert status.path is None
