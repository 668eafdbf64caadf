"""
DistributionContext: explicit bundle of the test-specific distributions.

Built once (typically at process start) and passed to the code that runs
the tests, instead of each test reaching for get_instance() on its own.
The bundled objects are the shared singletons, so building several
contexts never rebuilds a table.
"""

from __future__ import annotations

from dataclasses import dataclass

from pynpst.exact.cd import CDDistribution
from pynpst.exact.fisher import FisherDistribution
from pynpst.exact.kolmogorov import KolmogorovDistribution
from pynpst.exact.kolmogorov_two_sample import KolmogorovTwoSampleDistribution
from pynpst.exact.lilliefors import LillieforsDistribution
from pynpst.exact.mcnemar import McNemarDistribution
from pynpst.exact.page import PageDistribution
from pynpst.exact.partial_correlation import PartialCorrelationDistribution
from pynpst.exact.rank_sum import WilcoxonRankSumDistribution
from pynpst.exact.runs import TotalNumberOfRunsDistribution
from pynpst.exact.runs_up_down import RunsUpDownDistribution
from pynpst.exact.spearman import SpearmanDistribution
from pynpst.exact.von_neumann import NMDistribution, RVNDistribution
from pynpst.exact.wilcoxon import WilcoxonDistribution


@dataclass(frozen=True)
class DistributionContext:
    """Read-only references to every populated test-specific distribution."""
    lilliefors: LillieforsDistribution
    page: PageDistribution
    total_number_of_runs: TotalNumberOfRunsDistribution
    runs_up_down: RunsUpDownDistribution
    cd: CDDistribution
    kolmogorov: KolmogorovDistribution
    kolmogorov_two_sample: KolmogorovTwoSampleDistribution
    spearman: SpearmanDistribution
    wilcoxon: WilcoxonDistribution
    wilcoxon_rank_sum: WilcoxonRankSumDistribution
    fisher: FisherDistribution
    mcnemar: McNemarDistribution
    nm: NMDistribution
    rvn: RVNDistribution
    partial_correlation: PartialCorrelationDistribution

    @classmethod
    def create(cls) -> DistributionContext:
        """Context over the process-wide instances, building any not yet built."""
        return cls(
            lilliefors=LillieforsDistribution.get_instance(),
            page=PageDistribution.get_instance(),
            total_number_of_runs=TotalNumberOfRunsDistribution.get_instance(),
            runs_up_down=RunsUpDownDistribution.get_instance(),
            cd=CDDistribution.get_instance(),
            kolmogorov=KolmogorovDistribution.get_instance(),
            kolmogorov_two_sample=KolmogorovTwoSampleDistribution.get_instance(),
            spearman=SpearmanDistribution.get_instance(),
            wilcoxon=WilcoxonDistribution.get_instance(),
            wilcoxon_rank_sum=WilcoxonRankSumDistribution.get_instance(),
            fisher=FisherDistribution.get_instance(),
            mcnemar=McNemarDistribution.get_instance(),
            nm=NMDistribution.get_instance(),
            rvn=RVNDistribution.get_instance(),
            partial_correlation=PartialCorrelationDistribution.get_instance(),
        )
