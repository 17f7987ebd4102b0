"""Unit tests for joint dimensional impact."""

from __future__ import annotations

import logging

import pytest

from cutlist.domain import (
    DEFAULT_JOINTS,
    EdgeJoints,
    JointCategory,
    JointType,
    get_joint_by_id,
    get_joints_by_category,
)
from cutlist.domain.services.joint_resolver import (
    EdgeExtensions,
    joint_extension,
    resolve_edge_extensions,
)


class TestJointExtension:
    """extension = depth - tolerance for joints that extend the inserted piece."""

    @pytest.mark.parametrize(
        ("joint_id", "expected"),
        [
            ("butt-simple", 0),
            ("dowel", 0),
            ("cam-lock", 0),
            ("pocket-screw", 0),
            ("miter-45", 0),
            ("dado-6mm", 5.5),
            ("dado-8mm", 7.5),
            ("rabbet-back-6mm", 5.5),
            ("tongue-groove-6mm", 5.7),
        ],
    )
    def test_default_library(self, joint_id: str, expected: float) -> None:
        joint = get_joint_by_id(joint_id)
        assert joint is not None
        assert joint_extension(joint) == pytest.approx(expected)

    def test_tolerance_larger_than_depth_is_zero(self) -> None:
        joint = JointType(
            id="x", category=JointCategory.DADO, depth=1, tolerance=2, extends_inserted_piece=True
        )
        assert joint_extension(joint) == 0

    def test_non_extending_joint_ignores_depth(self) -> None:
        joint = JointType(id="x", category=JointCategory.BUTT, depth=10)
        assert joint_extension(joint) == 0


class TestResolveEdgeExtensions:
    """Per-edge resolution into length and width contributions."""

    def test_no_joints(self) -> None:
        assert resolve_edge_extensions(None, DEFAULT_JOINTS) == EdgeExtensions()

    def test_width_edges_extend_length(self) -> None:
        extensions = resolve_edge_extensions(
            EdgeJoints(width1="dado-8mm", width2="dado-8mm"), DEFAULT_JOINTS
        )
        assert extensions.length == pytest.approx(15)
        assert extensions.width == 0

    def test_length_edges_extend_width(self) -> None:
        extensions = resolve_edge_extensions(EdgeJoints(length2="rabbet-back-6mm"), DEFAULT_JOINTS)
        assert extensions.width == pytest.approx(5.5)
        assert extensions.length == 0

    def test_different_joints_per_edge_are_summed_independently(self) -> None:
        extensions = resolve_edge_extensions(
            EdgeJoints(width1="dado-8mm", width2="butt-simple", length1="dado-shallow"),
            DEFAULT_JOINTS,
        )
        assert extensions.length == pytest.approx(7.5)
        assert extensions.width == pytest.approx(2.5)

    def test_unknown_joint_contributes_nothing(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            extensions = resolve_edge_extensions(
                EdgeJoints(width1="nope"), DEFAULT_JOINTS, part_name="Shelf"
            )
        assert extensions == EdgeExtensions()
        assert "'nope'" in caplog.text
        assert "W1" in caplog.text

    def test_custom_library(self) -> None:
        library = (
            JointType(
                id="groove", category=JointCategory.DADO, depth=4, extends_inserted_piece=True
            ),
        )
        extensions = resolve_edge_extensions(EdgeJoints(width1="groove"), library)
        assert extensions.length == 4

    def test_thickness_mismatch_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            resolve_edge_extensions(
                EdgeJoints(width1="dado-6mm"), DEFAULT_JOINTS, part_name="Shelf", part_thickness=16
            )
        assert "expects 18.0mm" in caplog.text

    def test_matching_thickness_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            resolve_edge_extensions(
                EdgeJoints(width1="dado-6mm"), DEFAULT_JOINTS, part_thickness=18
            )
        assert caplog.text == ""


class TestJointLibrary:
    """Lookup helpers on the built-in library."""

    def test_get_joint_by_id_unknown(self) -> None:
        assert get_joint_by_id("missing") is None

    def test_get_joints_by_category(self) -> None:
        dados = get_joints_by_category(JointCategory.DADO)
        assert [j.id for j in dados] == ["dado-6mm", "dado-8mm", "dado-9mm", "dado-shallow"]

    def test_ids_are_unique(self) -> None:
        ids = [j.id for j in DEFAULT_JOINTS]
        assert len(ids) == len(set(ids))
