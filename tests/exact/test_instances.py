"""
Tests for shared instances and the distribution context.

Validates:
    - get_instance() returns one object per class, also under concurrent
      first access
    - Tables are built exactly once; direct construction is refused
    - as_probability clips rounding overshoot and rejects anything else
    - DistributionContext bundles the shared instances and is immutable
"""

import dataclasses
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from pynpst.core.exceptions import NumericalError
from pynpst.exact._common import as_probability
from pynpst.exact import (
    CDDistribution,
    CriticalPValue,
    DistributionContext,
    ExactDistribution,
    FisherDistribution,
    KolmogorovDistribution,
    KolmogorovTwoSampleDistribution,
    LillieforsDistribution,
    McNemarDistribution,
    NMDistribution,
    PageDistribution,
    PartialCorrelationDistribution,
    RunsUpDownDistribution,
    RVNDistribution,
    SpearmanDistribution,
    TotalNumberOfRunsDistribution,
    WilcoxonDistribution,
    WilcoxonRankSumDistribution,
)


class _SlowDistribution(ExactDistribution):
    builds = 0

    def _build_tables(self):
        type(self).builds += 1
        time.sleep(0.05)


class _OtherDistribution(ExactDistribution):

    def _build_tables(self):
        pass


# ═══════════════════════════════════════════════════════════════════════
# Shared instances
# ═══════════════════════════════════════════════════════════════════════


class TestGetInstance:

    def test_same_object(self):
        assert PageDistribution.get_instance() is PageDistribution.get_instance()

    def test_concurrent_first_access_builds_once(self):
        barrier = threading.Barrier(8)

        def fetch(_):
            barrier.wait()
            return _SlowDistribution.get_instance()

        with ThreadPoolExecutor(max_workers=8) as pool:
            instances = list(pool.map(fetch, range(8)))

        assert all(instance is instances[0] for instance in instances)
        assert _SlowDistribution.builds == 1

    def test_one_instance_per_class(self):
        assert _OtherDistribution.get_instance() is not _SlowDistribution.get_instance()
        assert isinstance(_OtherDistribution.get_instance(), _OtherDistribution)

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            ExactDistribution()

    def test_direct_construction_points_to_get_instance(self):
        with pytest.raises(TypeError, match="get_instance"):
            LillieforsDistribution()

    def test_direct_construction_leaves_shared_instance(self):
        shared = PageDistribution.get_instance()
        with pytest.raises(TypeError):
            PageDistribution()
        assert PageDistribution.get_instance() is shared


class TestAsProbability:

    def test_clips_rounding_overshoot(self):
        assert as_probability(1.0 + 1e-12, "p") == 1.0
        assert as_probability(-1e-15, "p") == 0.0

    def test_passes_probability_through(self):
        assert as_probability(0.25, "p") == 0.25

    @pytest.mark.parametrize("value", [1.5, -0.1, math.nan])
    def test_rejects_non_probability(self, value):
        with pytest.raises(NumericalError) as excinfo:
            as_probability(value, "tail")
        assert excinfo.value.quantity == "tail"


class TestCriticalPValue:

    def test_immutable(self):
        result = CriticalPValue(0.05, is_approximate=False)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.p_value = 0.01

    def test_float(self):
        assert float(CriticalPValue(0.01, True)) == 0.01


# ═══════════════════════════════════════════════════════════════════════
# Context
# ═══════════════════════════════════════════════════════════════════════


class TestDistributionContext:

    @pytest.mark.parametrize("field, cls", [
        ("lilliefors", LillieforsDistribution),
        ("page", PageDistribution),
        ("total_number_of_runs", TotalNumberOfRunsDistribution),
        ("runs_up_down", RunsUpDownDistribution),
        ("cd", CDDistribution),
        ("kolmogorov", KolmogorovDistribution),
        ("kolmogorov_two_sample", KolmogorovTwoSampleDistribution),
        ("spearman", SpearmanDistribution),
        ("wilcoxon", WilcoxonDistribution),
        ("wilcoxon_rank_sum", WilcoxonRankSumDistribution),
        ("fisher", FisherDistribution),
        ("mcnemar", McNemarDistribution),
        ("nm", NMDistribution),
        ("rvn", RVNDistribution),
        ("partial_correlation", PartialCorrelationDistribution),
    ])
    def test_fields_are_shared_instances(self, context, field, cls):
        assert getattr(context, field) is cls.get_instance()

    def test_create_twice_shares_tables(self, context):
        again = DistributionContext.create()
        assert again == context
        assert again.page.table is context.page.table

    def test_immutable(self, context):
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.page = None
