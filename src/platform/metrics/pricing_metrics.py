from prometheus_client import Counter, Histogram


class PricingMetrics:
    """
    Pricing Engine Metrics Collector

    Quote path is read-only and hot, commit path is rare but contended;
    both are tracked separately.
    """

    def __init__(self):
        # ========== Quote Metrics ==========
        self.quotes_total = Counter(
            'pricing_quotes_total',
            'Total pricing quotes produced',
            ['coupon_outcome'],  # none / accepted / rejected
        )

        self.quote_duration = Histogram(
            'pricing_quote_duration_seconds',
            'End-to-end quote time including catalog and store reads',
            buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
        )

        self.coupon_rejections = Counter(
            'pricing_coupon_rejections_total',
            'Coupons rejected during quoting',
            ['reason'],
        )

        self.skipped_rules = Counter(
            'pricing_rules_skipped_total',
            'Malformed pricing rules skipped during evaluation',
            ['rule_type'],
        )

        # ========== Redemption Metrics ==========
        self.redemption_commits = Counter(
            'pricing_coupon_redemption_commits_total',
            'Coupon redemption commit attempts',
            ['outcome'],
        )

    def record_quote(self, *, coupon_outcome: str, duration: float) -> None:
        self.quotes_total.labels(coupon_outcome=coupon_outcome).inc()
        self.quote_duration.observe(duration)

    def record_coupon_rejection(self, *, reason: str) -> None:
        self.coupon_rejections.labels(reason=reason).inc()

    def record_skipped_rule(self, *, rule_type: str) -> None:
        self.skipped_rules.labels(rule_type=rule_type).inc()

    def record_redemption_commit(self, *, outcome: str) -> None:
        self.redemption_commits.labels(outcome=outcome).inc()


# Global metrics instance
metrics = PricingMetrics()
