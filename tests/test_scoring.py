import unittest

from scoring import (
    FAIL,
    PASS,
    WARNING,
    Check,
    ContentInput,
    analyze_content,
    build_report,
    classify,
    round_half_up,
    score_content,
)

KEYPHRASE = "react portfolio"
FILLER = " ".join(["However, good projects show a clear problem and a clean result."] * 10)


def words(n: int, word: str = "lorem") -> str:
    return " ".join([word] * n)


def well_built_post() -> dict:
    body = f"""<p>Your react portfolio is the first thing a recruiter sees. {FILLER}</p>

<h2>Why a react portfolio matters</h2>

<p>Read our <a href="/blog/project-ideas">project ideas</a> and the <a href="https://react.dev/learn">official docs</a> before you start. {FILLER}</p>

<h2>Choosing projects</h2>

<img src="/img/portfolio.png" alt="Example react portfolio homepage">

<h3>Deploying</h3>

<p>{FILLER}</p>"""
    return {
        "title": "React Portfolio Guide: Build a Site That Gets You Hired",
        "meta_description": "Learn how to build a react portfolio that shows your best work and lands interviews.",
        "body_html": body,
        "focus_keyphrase": KEYPHRASE,
    }


def statuses(report) -> dict[str, str]:
    return {c.id: c.status for c in report.checks}


class EmptyContentTests(unittest.TestCase):
    def test_all_empty_scores_low_with_no_content_warnings(self):
        report = analyze_content("", "", "", "")
        self.assertEqual(len(report.checks), 16)
        self.assertEqual(statuses(report), {
            "seo-title": FAIL,
            "meta-description": FAIL,
            "focus-keyphrase": FAIL,
            "keyword-in-title": FAIL,
            "keyword-in-meta-description": FAIL,
            "keyword-in-first-paragraph": FAIL,
            "image-alt-text": WARNING,
            "internal-links": FAIL,
            "external-links": FAIL,
            "text-length": FAIL,
            "paragraph-length": WARNING,
            "subheadings": PASS,
            "readable-content": FAIL,
            "transition-words": FAIL,
            "passive-voice": PASS,
            "keyphrase-in-alt": WARNING,
        })
        self.assertEqual(report.overall_score, 22)
        self.assertEqual(report.tier, "poor")
        self.assertEqual((report.pass_count, report.warning_count, report.fail_count), (2, 3, 11))

    def test_none_inputs_are_treated_as_empty(self):
        report = analyze_content(None, None, None, None)
        self.assertEqual(report.to_dict(), analyze_content().to_dict())


class WellBuiltPostTests(unittest.TestCase):
    def test_core_checks_pass(self):
        post = well_built_post()
        self.assertEqual(len(post["title"]), 55)
        report = analyze_content(**post)
        s = statuses(report)
        for check_id in [
            "seo-title", "meta-description", "focus-keyphrase", "keyword-in-title",
            "keyword-in-first-paragraph", "image-alt-text", "internal-links",
            "external-links", "text-length", "subheadings", "keyphrase-in-alt",
        ]:
            self.assertEqual(s[check_id], PASS, check_id)
        self.assertGreaterEqual(report.pass_count, 9)
        self.assertIn(report.tier, ("good", "excellent"))

    def test_check_order_is_fixed(self):
        report = analyze_content(**well_built_post())
        self.assertEqual([c.id for c in report.checks], [
            "seo-title", "meta-description", "focus-keyphrase", "keyword-in-title",
            "keyword-in-meta-description", "keyword-in-first-paragraph", "image-alt-text",
            "internal-links", "external-links", "text-length", "paragraph-length",
            "subheadings", "readable-content", "transition-words", "passive-voice",
            "keyphrase-in-alt",
        ])

    def test_deterministic(self):
        post = well_built_post()
        self.assertEqual(analyze_content(**post).to_dict(), analyze_content(**post).to_dict())

    def test_score_content_matches_keyword_call(self):
        post = well_built_post()
        content = ContentInput(**post)
        self.assertEqual(score_content(content).to_dict(), analyze_content(**post).to_dict())

    def test_site_origin_turns_same_host_links_internal(self):
        body = '<p>See <a href="https://example.com/about">about</a>.</p>'
        without_site = statuses(analyze_content(body_html=body))
        with_site = statuses(analyze_content(body_html=body, site_origin="https://example.com"))
        self.assertEqual(without_site["external-links"], PASS)
        self.assertEqual(without_site["internal-links"], FAIL)
        self.assertEqual(with_site["external-links"], FAIL)
        self.assertEqual(with_site["internal-links"], PASS)


class TitleAndDescriptionTests(unittest.TestCase):
    def title_status(self, title, keyphrase=KEYPHRASE):
        return statuses(analyze_content(title=title, focus_keyphrase=keyphrase))["seo-title"]

    def test_61_character_title_with_keyphrase_warns(self):
        title = ("React portfolio tips " + "x" * 100)[:61]
        self.assertEqual(len(title), 61)
        self.assertEqual(self.title_status(title), WARNING)

    def test_in_range_title_without_keyphrase_warns(self):
        self.assertEqual(self.title_status("y" * 55), WARNING)

    def test_short_title_without_keyphrase_fails(self):
        self.assertEqual(self.title_status("My Site"), FAIL)

    def test_blank_title_fails(self):
        self.assertEqual(self.title_status("   "), FAIL)

    def test_long_description_with_keyphrase_warns(self):
        desc = "A react portfolio " + "z" * 200
        self.assertEqual(statuses(analyze_content(meta_description=desc, focus_keyphrase=KEYPHRASE))["meta-description"], WARNING)

    def test_long_description_without_keyphrase_fails(self):
        desc = "z" * 200
        self.assertEqual(statuses(analyze_content(meta_description=desc, focus_keyphrase=KEYPHRASE))["meta-description"], FAIL)

    def test_description_is_measured_as_text(self):
        desc = "<p><strong>react portfolio</strong> advice</p>"
        report = analyze_content(meta_description=desc, focus_keyphrase=KEYPHRASE)
        check = report.checks[1]
        self.assertEqual(check.status, PASS)
        self.assertIn("22 characters", check.message)

    def test_keyphrase_matching_is_case_insensitive(self):
        report = analyze_content(title="REACT PORTFOLIO", focus_keyphrase="React Portfolio")
        self.assertEqual(statuses(report)["keyword-in-title"], PASS)

    def test_long_keyphrase_warns(self):
        report = analyze_content(focus_keyphrase="how to build a react portfolio")
        self.assertEqual(statuses(report)["focus-keyphrase"], WARNING)


class BodyCheckTests(unittest.TestCase):
    def test_body_with_only_an_image_has_no_sentences(self):
        report = analyze_content(body_html='<img src="/a.png" alt="diagram">')
        s = statuses(report)
        self.assertEqual(s["readable-content"], FAIL)
        self.assertEqual(s["image-alt-text"], PASS)
        self.assertIsInstance(report.overall_score, int)
        self.assertTrue(0 <= report.overall_score <= 100)

    def test_half_long_paragraphs_warn(self):
        body = f"<p>{words(200)}.</p>\n\n<p>{words(50)}.</p>"
        self.assertEqual(statuses(analyze_content(body_html=body))["paragraph-length"], WARNING)

    def test_mostly_long_paragraphs_fail(self):
        body = f"<p>{words(200)}.</p>\n\n<p>{words(160)}.</p>\n\n<p>{words(20)}.</p>"
        self.assertEqual(statuses(analyze_content(body_html=body))["paragraph-length"], FAIL)

    def test_short_paragraphs_pass(self):
        body = f"<p>{words(40)}.</p>\n\n<p>{words(50)}.</p>"
        self.assertEqual(statuses(analyze_content(body_html=body))["paragraph-length"], PASS)

    def test_missing_alt_fails(self):
        body = '<img src="/a.png" alt="one"><img src="/b.png"><img src="/c.png" alt=" ">'
        check = analyze_content(body_html=body).checks[6]
        self.assertEqual(check.status, FAIL)
        self.assertIn("2 of 3", check.message)

    def test_long_content_without_subheadings_fails(self):
        body = f"<p>{words(320)}.</p>"
        self.assertEqual(statuses(analyze_content(body_html=body, focus_keyphrase=KEYPHRASE))["subheadings"], FAIL)

    def test_subheadings_without_keyphrase_warn(self):
        body = f"<h2>Intro</h2><p>{words(320)}.</p>"
        self.assertEqual(statuses(analyze_content(body_html=body, focus_keyphrase=KEYPHRASE))["subheadings"], WARNING)
        self.assertEqual(statuses(analyze_content(body_html=body))["subheadings"], WARNING)

    def test_long_sentences_lower_readability(self):
        body = f"<p>{words(30)}.</p>"
        self.assertEqual(statuses(analyze_content(body_html=body))["readable-content"], WARNING)

    def test_short_sentences_are_readable(self):
        body = "<p>We build apps. We ship fast. Users like it.</p>"
        self.assertEqual(statuses(analyze_content(body_html=body))["readable-content"], PASS)

    def test_transition_words_count_matches_per_sentence(self):
        body = "<p>However, we ship. Therefore we win. We rest. We eat.</p>"
        check = analyze_content(body_html=body).checks[13]
        self.assertEqual(check.status, PASS)
        self.assertIn("50%", check.message)

    def test_transition_words_warning_band(self):
        body = "<p>However, we ship. We win. We rest. We eat. We go.</p>"
        self.assertEqual(analyze_content(body_html=body).checks[13].status, WARNING)

    def test_passive_voice_heuristic(self):
        body = "<p>The site was designed. It is built. We code.</p>"
        check = analyze_content(body_html=body).checks[14]
        self.assertEqual(check.status, FAIL)
        self.assertIn("33%", check.message)

    def test_keyphrase_missing_from_alt_fails(self):
        body = '<img src="/a.png" alt="a laptop">'
        self.assertEqual(statuses(analyze_content(body_html=body, focus_keyphrase=KEYPHRASE))["keyphrase-in-alt"], FAIL)
        self.assertEqual(statuses(analyze_content(body_html=body))["keyphrase-in-alt"], WARNING)

    def test_keyphrase_in_first_hundred_words_only(self):
        late = f"<p>{words(120)} react portfolio.</p>"
        early = f"<p>react portfolio {words(120)}.</p>"
        self.assertEqual(statuses(analyze_content(body_html=late, focus_keyphrase=KEYPHRASE))["keyword-in-first-paragraph"], FAIL)
        self.assertEqual(statuses(analyze_content(body_html=early, focus_keyphrase=KEYPHRASE))["keyword-in-first-paragraph"], PASS)


class TotalityTests(unittest.TestCase):
    def test_malformed_inputs_never_raise(self):
        samples = [
            "<p><b>unclosed",
            "<<<>>>",
            '<a href="',
            "</div></div>",
            "<img alt='x'",
            "\x00\x01",
            "a" * 20000,
            "<script>var x = '<p>';</script>",
            "&amp;&nbsp;&#xZZ;",
            "<![foo[bar",
            '<a href="http://[broken">x</a>',
        ]
        for sample in samples:
            report = analyze_content(sample, sample, sample, sample)
            self.assertEqual(len(report.checks), 16)
            self.assertTrue(0 <= report.overall_score <= 100)
            total = sum(c.weight for c in report.checks)
            self.assertEqual(report.overall_score, round_half_up(total / 16 * 100))


class AggregationTests(unittest.TestCase):
    def make_checks(self, passes: int, warnings: int) -> list[Check]:
        checks = []
        for i in range(16):
            if i < passes:
                status, weight = PASS, 1.0
            elif i < passes + warnings:
                status, weight = WARNING, 0.5
            else:
                status, weight = FAIL, 0.0
            checks.append(Check(id=f"c{i}", name=f"c{i}", status=status, message="", weight=weight))
        return checks

    def test_rounds_half_up(self):
        report = build_report(self.make_checks(0, 4))
        self.assertEqual(report.overall_score, 13)

    def test_perfect_score(self):
        report = build_report(self.make_checks(16, 0))
        self.assertEqual(report.overall_score, 100)
        self.assertEqual(report.tier, "excellent")

    def test_tier_thresholds(self):
        self.assertEqual(classify(80, 12), "excellent")
        self.assertEqual(classify(80, 11), "good")
        self.assertEqual(classify(60, 8), "good")
        self.assertEqual(classify(60, 7), "needs-improvement")
        self.assertEqual(classify(40, 0), "needs-improvement")
        self.assertEqual(classify(39, 16), "poor")

    def test_tier_never_worsens_as_score_rises(self):
        rank = {"poor": 0, "needs-improvement": 1, "good": 2, "excellent": 3}
        for passes in range(17):
            tiers = [rank[classify(score, passes)] for score in range(101)]
            self.assertEqual(tiers, sorted(tiers))

    def test_summary_mentions_score_and_tier(self):
        report = analyze_content(**well_built_post())
        text = report.summary()
        self.assertIn(f"{report.overall_score}/100", text)
        self.assertIn(report.tier.upper(), text)


if __name__ == "__main__":
    unittest.main()
