"""Tests for DetectionResult folding and report aggregation."""

from __future__ import annotations

from functools import reduce

from depsweep.aggregator import build_report, filter_production_files, map_to_dependencies
from depsweep.models import DeclaredDependencySets, DetectionResult

ROOT = "/proj"


class TestDetectionResultMerge:
    def test_union_on_same_file(self):
        a = DetectionResult(using={"/proj/a.js": ["x", "y"]})
        b = DetectionResult(using={"/proj/a.js": ["y", "z"]})
        assert a.merge(b).using == {"/proj/a.js": ["x", "y", "z"]}

    def test_merge_is_order_insensitive_as_sets(self):
        parts = [
            DetectionResult(using={"/proj/a.js": ["x"]}),
            DetectionResult(using={"/proj/a.js": ["y"], "/proj/b.js": ["z"]}),
            DetectionResult(invalid_files={"/proj/c.js": ValueError("bad")}),
        ]
        forward = reduce(DetectionResult.merge, parts, DetectionResult())
        backward = reduce(DetectionResult.merge, reversed(parts), DetectionResult())
        assert {k: set(v) for k, v in forward.using.items()} == {
            k: set(v) for k, v in backward.using.items()
        }
        assert forward.invalid_files.keys() == backward.invalid_files.keys()

    def test_merge_does_not_mutate_inputs(self):
        a = DetectionResult(using={"/proj/a.js": ["x"]})
        a.merge(DetectionResult(using={"/proj/a.js": ["y"]}))
        assert a.using == {"/proj/a.js": ["x"]}

    def test_error_maps_last_write_wins(self):
        first, second = ValueError("1"), ValueError("2")
        a = DetectionResult(invalid_files={"/proj/a.js": first})
        b = DetectionResult(invalid_files={"/proj/a.js": second})
        assert a.merge(b).invalid_files["/proj/a.js"] is second


class TestMapToDependencies:
    def test_inverts_and_sorts(self):
        using = {"/proj/b.js": ["d2", "d1"], "/proj/a.js": ["d2"]}
        assert map_to_dependencies(using) == {
            "d1": ["/proj/b.js"],
            "d2": ["/proj/a.js", "/proj/b.js"],
        }

    def test_empty(self):
        assert map_to_dependencies({"/proj/a.js": []}) == {}


class TestFilterProductionFiles:
    def test_no_patterns_keeps_everything(self):
        using = {"/proj/a.js": ["x"], "/proj/test/a.js": ["y"]}
        assert filter_production_files(using, ROOT, []) == using

    def test_patterns_match_relative_paths(self):
        using = {"/proj/src/a.js": ["x"], "/proj/src/deep/b.js": ["y"], "/proj/test/c.js": ["z"]}
        kept = filter_production_files(using, ROOT, ["src/**/*.js"])
        assert set(kept) == {"/proj/src/a.js", "/proj/src/deep/b.js"}

    def test_root_level_star_does_not_reach_nested_files(self):
        using = {"/proj/index.js": ["a"], "/proj/test/a.test.js": ["b"]}
        assert set(filter_production_files(using, ROOT, ["*.js"])) == {"/proj/index.js"}

    def test_single_level_star_stays_in_directory(self):
        using = {"/proj/src/a.js": ["x"], "/proj/src/deep/b.js": ["y"]}
        assert set(filter_production_files(using, ROOT, ["src/*"])) == {"/proj/src/a.js"}

    def test_brace_patterns(self):
        using = {"/proj/src/a.js": ["x"], "/proj/lib/b.js": ["y"], "/proj/test/c.js": ["z"]}
        kept = filter_production_files(using, ROOT, ["{src,lib}/*.js"])
        assert set(kept) == {"/proj/src/a.js", "/proj/lib/b.js"}


class TestBuildReport:
    def test_unused_production_dependency(self):
        declared = DeclaredDependencySets(deps=("lodash",))
        report = build_report(DetectionResult(), declared, ROOT, [], False)
        assert report.dependencies == ["lodash"]

    def test_dev_dependency_used_anywhere(self):
        declared = DeclaredDependencySets(deps=("a",), dev_deps=("jest",))
        result = DetectionResult(using={"/proj/test/a.test.js": ["jest", "a"]})
        report = build_report(result, declared, ROOT, ["src/**"], False)
        assert report.dev_dependencies == []
        # used only outside production paths
        assert report.dependencies == ["a"]

    def test_production_dependency_used_in_production_path(self):
        declared = DeclaredDependencySets(deps=("a",))
        result = DetectionResult(using={"/proj/src/index.js": ["a"]})
        report = build_report(result, declared, ROOT, ["src/**"], False)
        assert report.dependencies == []

    def test_test_only_dependency_is_unused_with_root_pattern(self):
        declared = DeclaredDependencySets(deps=("a", "b"))
        result = DetectionResult(using={"/proj/index.js": ["a"], "/proj/test/a.test.js": ["b"]})
        report = build_report(result, declared, ROOT, ["*.js"], False)
        assert report.dependencies == ["b"]

    def test_missing_uses_all_files(self):
        declared = DeclaredDependencySets(deps=("a",), peer_deps=("p",), optional_deps=("o",))
        result = DetectionResult(
            using={
                "/proj/src/index.js": ["a", "p", "o", "left-pad"],
                "/proj/test/x.js": ["test-only"],
            }
        )
        report = build_report(result, declared, ROOT, ["src/**"], False)
        assert report.missing == {
            "left-pad": ["/proj/src/index.js"],
            "test-only": ["/proj/test/x.js"],
        }

    def test_skip_missing(self):
        result = DetectionResult(using={"/proj/a.js": ["left-pad"]})
        report = build_report(result, DeclaredDependencySets(), ROOT, [], True)
        assert report.missing == {}
        assert report.using == {"left-pad": ["/proj/a.js"]}

    def test_errors_pass_through(self):
        err = OSError("denied")
        result = DetectionResult(invalid_dirs={"/proj/x": err})
        report = build_report(result, DeclaredDependencySets(), ROOT, [], False)
        assert report.invalid_dirs == {"/proj/x": err}

    def test_declared_order_preserved(self):
        declared = DeclaredDependencySets(deps=("zeta", "alpha", "mid"))
        report = build_report(DetectionResult(), declared, ROOT, [], False)
        assert report.dependencies == ["zeta", "alpha", "mid"]

    def test_to_dict_shape(self):
        result = DetectionResult(
            using={"/proj/a.js": ["x"]}, invalid_files={"/proj/b.js": ValueError("bad")}
        )
        data = build_report(result, DeclaredDependencySets(), ROOT, [], False).to_dict()
        assert data == {
            "dependencies": [],
            "devDependencies": [],
            "missing": {"x": ["/proj/a.js"]},
            "using": {"x": ["/proj/a.js"]},
            "invalidFiles": {"/proj/b.js": "bad"},
            "invalidDirs": {},
        }
