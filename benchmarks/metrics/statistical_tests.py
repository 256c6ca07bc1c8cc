# benchmarks/metrics/statistical_tests.py
import numpy as np
from scipy import stats
from typing import Dict, List, Tuple


class StatisticalValidator:
    def __init__(self, alpha: float = 0.05):
        if not (0 < alpha < 1):
            raise ValueError("Significance level must be in (0, 1)")
        self.alpha = alpha

    def summarize(self, samples: List[float]) -> Dict:
        if not samples:
            return {'error': 'No samples'}

        data = np.asarray(samples, dtype=float)
        summary = {
            'mean': float(np.mean(data)),
            'median': float(np.median(data)),
            'std': float(np.std(data)),
            'min': float(np.min(data)),
            'max': float(np.max(data)),
            'q25': float(np.percentile(data, 25)),
            'q75': float(np.percentile(data, 75))
        }
        summary['ci_95'] = self.confidence_interval(data) if len(data) > 1 and np.std(data) > 0 else (summary['mean'], summary['mean'])
        return summary

    @staticmethod
    def confidence_interval(data: np.ndarray, confidence: float = 0.95) -> Tuple[float, float]:
        n = len(data)
        mean = float(np.mean(data))
        h = float(stats.sem(data) * stats.t.ppf((1 + confidence) / 2., n - 1))
        return mean - h, mean + h

    def compare(self, first: List[float], second: List[float]) -> Dict:
        """Two-sided Welch t-test, Mann-Whitney U and Cohen's d of first vs second."""
        a = np.asarray(first, dtype=float)
        b = np.asarray(second, dtype=float)
        if len(a) < 2 or len(b) < 2:
            raise ValueError("Each sample needs at least two observations")

        if np.std(a) == 0 and np.std(b) == 0:
            t_stat, t_p = np.nan, np.nan
        else:
            t_stat, t_p = stats.ttest_ind(a, b, equal_var=False)
        u_stat, u_p = stats.mannwhitneyu(a, b, alternative='two-sided')

        pooled_std = np.sqrt(((len(a) - 1) * np.var(a) + (len(b) - 1) * np.var(b)) / (len(a) + len(b) - 2))
        cohens_d = (np.mean(a) - np.mean(b)) / pooled_std if pooled_std > 0 else np.nan

        return {
            't_test': {'statistic': float(t_stat), 'p_value': float(t_p)},
            'mann_whitney': {'statistic': float(u_stat), 'p_value': float(u_p)},
            'effect_size': {'cohens_d': float(cohens_d)},
            'significant_difference': bool(t_p < self.alpha) if not np.isnan(t_p) else False
        }
