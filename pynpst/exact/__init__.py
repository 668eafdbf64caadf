"""
Test-specific distributions.

Each distribution combines precomputed reference tables with an asymptotic
fallback for sizes outside the tables:

    LillieforsDistribution             - Lilliefors normality / exponentiality
    PageDistribution                   - Page's L for ordered alternatives
    TotalNumberOfRunsDistribution      - Wald-Wolfowitz total number of runs
    RunsUpDownDistribution             - runs up and down
    CDDistribution                     - Charkraborti-Desu W
    KolmogorovDistribution             - one-sample Kolmogorov-Smirnov
    KolmogorovTwoSampleDistribution    - two-sample Kolmogorov-Smirnov
    SpearmanDistribution               - Spearman's rho
    WilcoxonDistribution               - Wilcoxon signed-rank
    WilcoxonRankSumDistribution        - Wilcoxon rank-sum / Mann-Whitney
    FisherDistribution                 - Fisher's exact test for 2x2 tables
    McNemarDistribution                - McNemar's test
    NMDistribution, RVNDistribution    - rank von Neumann test
    PartialCorrelationDistribution     - Kendall's partial tau

Use get_instance() for the shared, lazily built instance of a class, or
DistributionContext.create() for all of them at once.
"""

from pynpst.exact._common import CriticalPValue, ExactDistribution, as_probability
from pynpst.exact._permutations import rank_product_counts, squared_difference_counts
from pynpst.exact.lilliefors import LillieforsDistribution
from pynpst.exact.page import PageDistribution
from pynpst.exact.runs import TotalNumberOfRunsDistribution, runs_probabilities
from pynpst.exact.runs_up_down import RunsUpDownDistribution, runs_up_down_counts
from pynpst.exact.cd import CDDistribution
from pynpst.exact.kolmogorov import KolmogorovDistribution
from pynpst.exact.kolmogorov_two_sample import KolmogorovTwoSampleDistribution, two_sample_ks_tail
from pynpst.exact.spearman import SpearmanDistribution
from pynpst.exact.wilcoxon import WilcoxonDistribution, signed_rank_counts
from pynpst.exact.rank_sum import WilcoxonRankSumDistribution, rank_sum_counts
from pynpst.exact.fisher import FisherDistribution
from pynpst.exact.mcnemar import McNemarDistribution
from pynpst.exact.von_neumann import NMDistribution, RVNDistribution
from pynpst.exact.partial_correlation import PartialCorrelationDistribution, partial_tau_distribution
from pynpst.exact.context import DistributionContext

__all__ = [
    "CriticalPValue",
    "ExactDistribution",
    "as_probability",
    "rank_product_counts",
    "squared_difference_counts",
    "LillieforsDistribution",
    "PageDistribution",
    "TotalNumberOfRunsDistribution",
    "runs_probabilities",
    "RunsUpDownDistribution",
    "runs_up_down_counts",
    "CDDistribution",
    "KolmogorovDistribution",
    "KolmogorovTwoSampleDistribution",
    "two_sample_ks_tail",
    "SpearmanDistribution",
    "WilcoxonDistribution",
    "signed_rank_counts",
    "WilcoxonRankSumDistribution",
    "rank_sum_counts",
    "FisherDistribution",
    "McNemarDistribution",
    "NMDistribution",
    "RVNDistribution",
    "PartialCorrelationDistribution",
    "partial_tau_distribution",
    "DistributionContext",
]
