"""Frame graph module tests"""
import pytest

import itertools as itl

from sdf_dom.errors import ErrorCode, FrameNotFoundError, GraphInvalidError
from sdf_dom.frame_graph import FrameGraph, FrameRecord
from sdf_dom.geometry import Pose

from testing_utilities import random_pose, xyz_pose

__all__ = ['TestFrameGraph', 'TestFrameGraphValidation']

FRAMES_A = ['A', 'B', 'C', 'D', 'E']

class TestFrameGraph():
    @staticmethod
    def _system_A() -> tuple[FrameGraph, dict[str, Pose]]:
        """Tree with two branches: A <- B <- C and A <- D, plus E off the root"""
        pose = {name: random_pose() for name in FRAMES_A}
        graph = FrameGraph.build([
            FrameRecord('C', pose['C'], 'B', 'link'),
            FrameRecord('A', pose['A'], '', 'link'),
            FrameRecord('B', pose['B'], 'A', 'joint'),
            FrameRecord('D', pose['D'], 'A', 'frame'),
            FrameRecord('E', pose['E'], '', 'frame')], 'system_A')

        return graph, pose

    def test_valid(self):
        graph, _ = self._system_A()

        assert graph.valid
        assert graph.errors == []
        assert graph.scope == 'system_A'
        assert set(graph.nodes) == {'', *FRAMES_A}
        assert graph.number_of_edges() == len(FRAMES_A)

    def test_structure(self):
        graph, _ = self._system_A()

        assert graph.relative_to('C') == 'B'
        assert graph.relative_to('A') == ''
        assert graph.relative_to('') is None
        assert graph.nodes['B']['kind'] == 'joint'

    def test_chain(self):
        graph, _ = self._system_A()

        assert graph.chain('C') == ['C', 'B', 'A', '']
        assert graph.chain('') == ['']

    def test_path(self):
        graph, _ = self._system_A()

        assert graph.path('C', 'D') == ['C', 'B', 'A', 'D']
        assert graph.path('D', 'E') == ['D', 'A', '', 'E']

    def test_root_pose(self):
        """Poses in the root frame compose declared poses along the chain"""
        graph, pose = self._system_A()

        assert graph.pose('A') == pose['A']
        assert graph.pose('C') == pose['A'] @ pose['B'] @ pose['C']
        assert graph.pose('D', '') == pose['A'] @ pose['D']
        assert graph.pose('') == Pose.identity()

    def test_declared_pose(self):
        graph, pose = self._system_A()

        assert graph.pose('C', 'B') == pose['C']
        assert graph.pose('B', 'A') == pose['B']

    def test_cross_branch_pose(self):
        graph, pose = self._system_A()

        expected = (pose['A'] @ pose['D']).inverse() @ (pose['A'] @ pose['B'] @ pose['C'])
        assert graph.pose('C', 'D') == expected

    @pytest.mark.parametrize('name', ['', *FRAMES_A])
    def test_self_pose(self, name: str):
        graph, _ = self._system_A()
        assert graph.pose(name, name) == Pose.identity()

    @pytest.mark.parametrize('source, target', list(itl.permutations(['', *FRAMES_A], 2)))
    def test_inverse_symmetry(self, source: str, target: str):
        graph, _ = self._system_A()
        assert graph.pose(source, target) == graph.pose(target, source).inverse()

    def test_transitivity(self):
        graph, _ = self._system_A()

        for x, y, z in itl.permutations(['', *FRAMES_A], 3):
            assert graph.pose(y, z) @ graph.pose(x, y) == graph.pose(x, z), (x, y, z)

    def test_frame_not_found(self):
        graph, _ = self._system_A()

        with pytest.raises(FrameNotFoundError) as info:
            graph.pose('Z')
        assert info.value.code == ErrorCode.FRAME_NOT_FOUND
        assert info.value.name == 'Z'

        with pytest.raises(FrameNotFoundError):
            graph.pose('A', 'Z')

    def test_long_chain(self):
        """Chains are resolved without recursion"""
        n = 5000
        step = xyz_pose(0.001,0,0)
        graph = FrameGraph.build(
            [FrameRecord(f"f{i}", step, f"f{i-1}" if i else '') for i in range(n)])

        assert graph.valid
        assert graph.pose(f"f{n-1}") == xyz_pose(n*0.001,0,0)
        assert graph.pose('f0', f"f{n-1}") == xyz_pose(-(n-1)*0.001,0,0)

    def test_empty(self):
        graph = FrameGraph.build([])

        assert graph.valid
        assert list(graph.nodes) == ['']
        assert graph.pose('') == Pose.identity()

class TestFrameGraphValidation():
    def test_duplicate_name(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), '', 'link'),
            FrameRecord('a', Pose(), '', 'frame')], 'scope')

        assert not graph.valid
        assert [e.code for e in graph.errors] == [ErrorCode.DUPLICATE_NAME]
        assert 'Frame name [a]' in graph.errors[0].message
        assert 'link' in graph.errors[0].message

    def test_duplicate_name_locations(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), '', 'link', 7),
            FrameRecord('a', Pose(), '', 'link', 9)], 'scope')

        assert graph.errors[0].message == (
            "Link name [a] (line 9) in scope [scope] conflicts with the link "
            "of the same name (line 7)")

    def test_duplicate_names_are_case_sensitive(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), '', 'link'),
            FrameRecord('A', Pose(), '', 'link')])
        assert graph.valid

    def test_relative_to_invalid(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), '', 'link'),
            FrameRecord('b', Pose(), 'missing', 'link')], 'scope')

        assert [e.code for e in graph.errors] == [ErrorCode.POSE_RELATIVE_TO_INVALID]
        assert '[missing]' in graph.errors[0].message
        assert graph.relative_to('b') is None

    def test_cycle(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), 'b', 'link'),
            FrameRecord('b', Pose(), 'a', 'link')], 'scope')

        assert [e.code for e in graph.errors] == [ErrorCode.POSE_RELATIVE_TO_CYCLE]
        assert 'a -> b -> a' in graph.errors[0].message

    def test_self_cycle(self):
        graph = FrameGraph.build([FrameRecord('a', Pose(), 'a', 'link')])

        assert [e.code for e in graph.errors] == [ErrorCode.POSE_RELATIVE_TO_CYCLE]
        assert '[a]' in graph.errors[0].message

    def test_cycle_back_into_ancestor_chain(self):
        """Frames feeding a cycle do not report it again"""
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), 'c', 'link'),
            FrameRecord('b', Pose(), 'a', 'link'),
            FrameRecord('c', Pose(), 'b', 'link'),
            FrameRecord('d', Pose(), 'c', 'link'),
            FrameRecord('e', Pose(), 'd', 'link'),
            FrameRecord('f', Pose(), '', 'link')])

        assert [e.code for e in graph.errors] == [ErrorCode.POSE_RELATIVE_TO_CYCLE]

    def test_independent_cycles(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), 'b'), FrameRecord('b', Pose(), 'a'),
            FrameRecord('c', Pose(), 'c')])

        assert [e.code for e in graph.errors] == [ErrorCode.POSE_RELATIVE_TO_CYCLE]*2

    def test_accumulates_all_errors(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), '', 'link'),
            FrameRecord('a', Pose(), '', 'joint'),
            FrameRecord('b', Pose(), 'nowhere', 'link'),
            FrameRecord('c', Pose(), 'c', 'frame')])

        assert [e.code for e in graph.errors] == [
            ErrorCode.DUPLICATE_NAME,
            ErrorCode.POSE_RELATIVE_TO_INVALID,
            ErrorCode.POSE_RELATIVE_TO_CYCLE]

    def test_invalid_graph_fails_fast(self):
        graph = FrameGraph.build([
            FrameRecord('a', Pose(), 'b', 'link'),
            FrameRecord('b', Pose(), 'a', 'link'),
            FrameRecord('c', Pose(), '', 'link')])

        with pytest.raises(GraphInvalidError) as info:
            graph.pose('c')
        assert info.value.code == ErrorCode.GRAPH_INVALID
        assert info.value.errors == graph.errors

        with pytest.raises(GraphInvalidError):
            graph.chain('c')

    def test_nameless_records_ignored(self):
        graph = FrameGraph.build([FrameRecord('', Pose(), 'x', 'link')])

        assert graph.valid
        assert list(graph.nodes) == ['']
