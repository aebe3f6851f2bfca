"""Tests for LearningPackage validation."""
import pytest

from sensei.errors import FormatError
from sensei.models import LearningPackage


class TestFromDict:
    def test_valid_package_preserved_verbatim(self, package_dict):
        pkg = LearningPackage.from_dict(package_dict)
        assert pkg.expert_summary == package_dict["expertSummary"]
        assert pkg.simple_explanation == package_dict["simpleExplanation"]
        assert pkg.methodology_flowchart == package_dict["methodologyFlowchart"]
        assert pkg.python_code == package_dict["pythonCode"]
        assert pkg.key_contributions == tuple(package_dict["keyContributions"])
        assert pkg.video_script[1].narration == "Each token scores the others."
        assert pkg.flashcards[0].back == "Query, key and value projections"
        assert pkg.quiz[1].options == ("4", "6", "8")
        assert pkg.quiz[1].correct_answer_index == 2
        assert pkg.to_dict() == package_dict

    def test_package_is_immutable(self, package_dict):
        pkg = LearningPackage.from_dict(package_dict)
        with pytest.raises(AttributeError):
            pkg.expert_summary = "changed"

    @pytest.mark.parametrize("key", [
        "expertSummary", "simpleExplanation", "keyContributions", "methodologyFlowchart",
        "visualDiagramDescription", "videoScript", "pythonCode", "flashcards", "quiz",
        "additionalInsights",
    ])
    def test_missing_field_rejected(self, package_dict, key):
        del package_dict[key]
        with pytest.raises(FormatError, match=key):
            LearningPackage.from_dict(package_dict)

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_out_of_range_answer_rejected(self, package_dict, index):
        package_dict["quiz"][0]["correctAnswerIndex"] = index
        with pytest.raises(FormatError, match="out of range"):
            LearningPackage.from_dict(package_dict)

    @pytest.mark.parametrize("index", ["0", 0.0, True, None])
    def test_non_integer_answer_rejected(self, package_dict, index):
        package_dict["quiz"][0]["correctAnswerIndex"] = index
        with pytest.raises(FormatError):
            LearningPackage.from_dict(package_dict)

    def test_single_option_rejected(self, package_dict):
        package_dict["quiz"][0]["options"] = ["Only one"]
        package_dict["quiz"][0]["correctAnswerIndex"] = 0
        with pytest.raises(FormatError, match="at least two"):
            LearningPackage.from_dict(package_dict)

    def test_blank_summary_rejected(self, package_dict):
        package_dict["expertSummary"] = "   "
        with pytest.raises(FormatError):
            LearningPackage.from_dict(package_dict)

    def test_nested_field_missing_rejected(self, package_dict):
        del package_dict["videoScript"][0]["visual"]
        with pytest.raises(FormatError, match=r"videoScript\[0\]"):
            LearningPackage.from_dict(package_dict)

    def test_wrong_container_type_rejected(self, package_dict):
        package_dict["flashcards"] = {"front": "a", "back": "b"}
        with pytest.raises(FormatError):
            LearningPackage.from_dict(package_dict)

    def test_non_object_rejected(self):
        with pytest.raises(FormatError):
            LearningPackage.from_dict(["not", "an", "object"])

    def test_unquoted_flowchart_accepted(self, package_dict):
        package_dict["methodologyFlowchart"] = "graph TD\n A[Input Data] --> B[Process]"
        pkg = LearningPackage.from_dict(package_dict)
        assert pkg.methodology_flowchart == "graph TD\n A[Input Data] --> B[Process]"

    def test_empty_lists_allowed(self, package_dict):
        package_dict["quiz"] = []
        package_dict["flashcards"] = []
        pkg = LearningPackage.from_dict(package_dict)
        assert pkg.quiz == () and pkg.flashcards == ()
