"""Tests for modulegen.classifier."""

from __future__ import annotations

from typing import Mapping, Optional

from modulegen.classifier import (
    MODULAR_RELEASE_PLACEHOLDER,
    MODULAR_REPOS_PLACEHOLDER,
    Defaults,
    Exclusions,
    classify,
)
from modulegen.models import ComponentRecord, Module, RunMode
from modulegen.rationale import format_rationale

DEFAULTS = Defaults(ref="master", rationale="Autogenerated by Host & Platform tooling.")


def _run(
    mode: RunMode,
    *,
    selfhosting=frozenset(),
    runtime=frozenset(),
    refs: Mapping[str, str] | None = None,
    rationales: Mapping[str, Mapping[str, Optional[str]]] | None = None,
):
    results = {}
    exclusions = Exclusions()
    for module in mode.modules:
        results[module], exclusions = classify(
            module,
            selfhosting=frozenset(selfhosting),
            runtime=frozenset(runtime),
            refs=refs or {},
            rationales=(rationales or {}).get(module.value, {}),
            exclusions=exclusions,
            defaults=DEFAULTS,
        )
    return results, exclusions


def test_run_modes_select_modules_in_fixed_order() -> None:
    assert RunMode.from_base("bootstrap").modules == (Module.BOOTSTRAP,)
    assert RunMode.from_base("atomic").modules == (Module.ATOMIC,)
    assert RunMode.from_base("hp").modules == (Module.HOST, Module.SHIM, Module.PLATFORM)
    assert RunMode.from_base("anything-else") is RunMode.HOST_PLATFORM


def test_bootstrap_takes_selfhosting_except_shim_signed() -> None:
    results, _ = _run(
        RunMode.BOOTSTRAP,
        selfhosting={"gcc-7.2.1-2.fc27", "shim-signed-13-0.7", "shim-13-0.7"},
        runtime={"bash-4.4.12-5.fc27"},
        refs={"gcc-7.2.1-2.fc27": "f27"},
    )

    bootstrap = results[Module.BOOTSTRAP].components
    assert set(bootstrap) == {"gcc", "shim"}
    assert bootstrap["gcc"] == ComponentRecord(
        identifier="gcc-7.2.1-2.fc27",
        reference="f27",
        rationale=DEFAULTS.rationale,
    )
    assert bootstrap["shim"].reference == "master"


def test_host_scenario_excludes_from_platform() -> None:
    results, exclusions = _run(
        RunMode.HOST_PLATFORM,
        runtime={"foo-1.0-1.fc27", "bar-2.0-1.fc27"},
        rationales={"host": {"foo": format_rationale("needed for X")}, "shim": {}},
    )

    assert results[Module.HOST].components == {
        "foo": ComponentRecord(
            identifier="foo-1.0-1.fc27",
            reference="master",
            rationale="Needed for x.",
        )
    }
    assert "foo" not in results[Module.PLATFORM].components
    assert "bar" in results[Module.PLATFORM].components
    assert exclusions.claimed_by_host_or_shim == frozenset({"foo"})
    assert exclusions.claimed_by_shim == frozenset()


def test_host_and_shim_names_never_reach_platform() -> None:
    runtime = {
        "kernel-4.13.9-300.fc27",
        "shim-13-0.7",
        "grub2-2.02-19.fc27",
        "bash-4.4.12-5.fc27",
    }
    rationales = {
        "host": {"kernel": "the kernel", "listed-but-absent": None},
        "shim": {"shim": "uefi shim", "grub2": None},
    }
    results, exclusions = _run(RunMode.HOST_PLATFORM, runtime=runtime, rationales=rationales)

    host_and_shim = set(rationales["host"]) | set(rationales["shim"])
    assert host_and_shim.isdisjoint(results[Module.PLATFORM].names())
    assert results[Module.SHIM].names() == {"shim", "grub2"}
    assert results[Module.SHIM].components["grub2"].rationale == DEFAULTS.rationale
    assert results[Module.HOST].names() == {"kernel"}
    assert exclusions.claimed_by_shim == frozenset({"shim", "grub2"})
    assert "listed-but-absent" in exclusions.claimed_by_host_or_shim


def test_atomic_excludes_only_shim_claims() -> None:
    exclusions = Exclusions().claim(Module.HOST, {"kernel"}).claim(Module.SHIM, {"shim"})

    atomic, after = classify(
        Module.ATOMIC,
        selfhosting=frozenset(),
        runtime=frozenset({"kernel-4.13.9-300.fc27", "shim-13-0.7"}),
        refs={},
        rationales={},
        exclusions=exclusions,
        defaults=DEFAULTS,
    )

    assert atomic.names() == {"kernel"}
    assert after == exclusions


def test_exclusion_snapshots_are_not_mutated() -> None:
    original = Exclusions()
    updated = original.claim(Module.SHIM, {"shim"})

    assert original.claimed_by_shim == frozenset()
    assert updated.claimed_by_shim == frozenset({"shim"})
    assert updated.claimed_by_host_or_shim == frozenset({"shim"})


def test_release_is_replaced_by_modular_placeholder() -> None:
    results, _ = _run(RunMode.HOST_PLATFORM, runtime={"fedora-release-27-1", "bash-4.4.12-5.fc27"})

    platform = results[Module.PLATFORM].components
    assert "fedora-release" not in platform
    assert platform["fedora-modular-release"].identifier == MODULAR_RELEASE_PLACEHOLDER
    assert platform["fedora-modular-release"].reference == "master"


def test_repos_are_kept_and_supplemented() -> None:
    results, _ = _run(RunMode.ATOMIC, runtime={"fedora-repos-27-1", "fedora-release-27-1"})

    atomic = results[Module.ATOMIC].components
    assert set(atomic) == {"fedora-repos", "fedora-modular-repos", "fedora-modular-release"}
    assert atomic["fedora-repos"].identifier == "fedora-repos-27-1"
    assert atomic["fedora-modular-repos"].identifier == MODULAR_REPOS_PLACEHOLDER


def test_default_fill_for_unresolved_component() -> None:
    results, _ = _run(RunMode.ATOMIC, runtime={"zlib-1.2.11-4.fc27"}, refs={"other-1-1": "f27"})

    record = results[Module.ATOMIC].components["zlib"]
    assert record.reference == DEFAULTS.ref
    assert record.rationale == DEFAULTS.rationale


def test_name_collisions_keep_greatest_identifier() -> None:
    results, _ = _run(
        RunMode.BOOTSTRAP,
        selfhosting={"bash-4.4.12-5.fc27", "bash-4.4.12-4.fc27"},
    )

    assert results[Module.BOOTSTRAP].components["bash"].identifier == "bash-4.4.12-5.fc27"


def test_with_reference_patches_only_named_components() -> None:
    results, _ = _run(RunMode.ATOMIC, runtime={"fedora-release-27-1", "bash-4.4.12-5.fc27"})
    atomic = results[Module.ATOMIC]

    patched = atomic.with_reference(["fedora-modular-release", "fedora-modular-repos"], "f27")

    assert patched.components["fedora-modular-release"].reference == "f27"
    assert patched.components["bash"].reference == "master"
    assert atomic.components["fedora-modular-release"].reference == "master"
    assert "fedora-modular-repos" not in patched.components
