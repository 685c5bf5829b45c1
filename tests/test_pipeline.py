import io
import unittest

from hostsan.pipeline import FilterPolicy, FilterStats, HostFilter, Verdict, classify
from hostsan.suffixes import LocateResult, SuffixLocator, SuffixMatch

LINES = [
    "https://www.Example.COM:8443/a/b\n",
    "blog.example.co.uk\n",
    "co.uk\n",
    "one.0x4433\n",
    "8.8.8.8\n",
    "10.0.0.1\n",
    "localhost\n",
    "\n",
]


class ClassifyTests(unittest.TestCase):
    def test_invalid_is_dropped_regardless_of_policy(self):
        result = LocateResult(host="10.0.0.1", valid=False, is_ip=True)
        self.assertIs(classify(result, FilterPolicy(keep_ip=True, keep_unknown_suffix=True)), Verdict.DROP)

    def test_ip_requires_keep_ip(self):
        result = LocateResult(host="8.8.8.8", valid=True, is_ip=True)
        self.assertIs(classify(result, FilterPolicy()), Verdict.REJECT)
        self.assertIs(classify(result, FilterPolicy(keep_ip=True)), Verdict.ACCEPT)

    def test_matched_domain_is_accepted(self):
        result = LocateResult(host="example.com", valid=True, apex_index=0, suffix_index=8,
                              match=SuffixMatch.MATCHED)
        self.assertIs(classify(result, FilterPolicy()), Verdict.ACCEPT)

    def test_unknown_and_bare_suffixes(self):
        for match in (SuffixMatch.UNMATCHED, SuffixMatch.BARE_SUFFIX):
            with self.subTest(match=match):
                result = LocateResult(host="co.uk", valid=True, match=match)
                self.assertIs(classify(result, FilterPolicy()), Verdict.REJECT)
                self.assertIs(classify(result, FilterPolicy(keep_unknown_suffix=True)), Verdict.ACCEPT)


class HostFilterTests(unittest.TestCase):
    def setUp(self):
        self.locator = SuffixLocator({"com", "uk", "co.uk"})

    def _run(self, policy=None):
        accepted, rejected = io.StringIO(), io.StringIO()
        stats = HostFilter(self.locator, policy).run(LINES, accepted, rejected)
        return stats, accepted.getvalue().splitlines(), rejected.getvalue().splitlines()

    def test_default_policy_routes_lines(self):
        stats, accepted, rejected = self._run()
        self.assertEqual(accepted, ["example.com", "blog.example.co.uk"])
        self.assertEqual(rejected, ["co.uk", "one.0x4433", "8.8.8.8"])
        self.assertEqual(stats, FilterStats(accepted=2, rejected=3, dropped=3))
        self.assertEqual(stats.total, len(LINES))

    def test_permissive_policy(self):
        stats, accepted, rejected = self._run(FilterPolicy(keep_ip=True, keep_unknown_suffix=True))
        self.assertEqual(
            accepted,
            ["example.com", "blog.example.co.uk", "co.uk", "one.0x4433", "8.8.8.8"],
        )
        self.assertEqual(rejected, [])
        self.assertEqual(stats.dropped, 3)

    def test_process_strips_line_endings(self):
        result, verdict = HostFilter(self.locator).process("example.com\r\n")
        self.assertEqual(result.host, "example.com")
        self.assertIs(verdict, Verdict.ACCEPT)


if __name__ == "__main__":
    unittest.main()
