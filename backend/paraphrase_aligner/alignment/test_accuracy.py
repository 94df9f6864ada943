from __future__ import annotations

import pytest

from paraphrase_aligner.alignment.accuracy import EvaluationReport, evaluate, split_gold_standard
from paraphrase_aligner.alignment.alignment import Alignment
from paraphrase_aligner.alignment.alignment_utils import ConfigurationError
from paraphrase_aligner.alignment.driver import make_align_fn
from paraphrase_aligner.alignment.edits import Edit
from paraphrase_aligner.alignment.features import FeatureContext, edit_type, lexical_similarity
from paraphrase_aligner.alignment.greek_aligner import GreekAligner
from paraphrase_aligner.alignment.words import GoldStandard, Problem, Word


def _eq_gold(n: int, text: str) -> GoldStandard:
    source, target = Word(id=f"HOM.{n}", text=text), Word(id=f"PARA.{n}", text=text)
    return GoldStandard(
        id=f"1.{n}",
        problem=Problem.from_words([source], [target]),
        alignment=Alignment.from_edits(Edit.eq(source, target)),
    )


@pytest.mark.parametrize("fraction, sizes", [(0.3, (3, 7)), (0.0, (0, 10)), (1.0, (10, 0)), (0.25, (2, 8))])
def test_split_gold_standard(fraction: float, sizes) -> None:
    corpus = [_eq_gold(n, "x") for n in range(10)]
    training, test = split_gold_standard(corpus, fraction)
    assert (len(training), len(test)) == sizes
    assert training + test == corpus


def test_split_fraction_out_of_range() -> None:
    with pytest.raises(ConfigurationError):
        split_gold_standard([], 1.5)


def test_evaluate_perfect_predictions() -> None:
    features, context = [edit_type, lexical_similarity], FeatureContext()
    align_fn = make_align_fn(GreekAligner(), features, 1, context)

    report = evaluate([_eq_gold(1, "rex"), _eq_gold(2, "lupus")], align_fn, features, [0.5, 0.5], context)

    assert len(report) == 2
    assert report.mean_edit_accuracy == 1.0
    assert report.mean_score_accuracy == 1.0
    assert [r.problem_id for r in report.results] == ["1.1", "1.2"]


def test_empty_report() -> None:
    report = EvaluationReport()
    assert report.mean_edit_accuracy == 0.0
    assert report.mean_score_accuracy == 0.0
