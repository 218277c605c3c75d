from datetime import date
import pytest
from normalize.models import ContributorProjectLink, ContributionSnapshot
from normalize.util import load_snapshot
from scoring.window import TimeWindow
from scoring.contributors import summarize_contributors, contributor_counts, activity_per_year

TODAY = date(2025, 6, 30)


def _link(email, project, commits, latest, first, per_year=None):
    return ContributorProjectLink(email, project, total_commits=commits, commits_30_days=1, commits_90_days=2, latest_commit_date=latest, first_commit_date=first, commits_per_year=per_year)


@pytest.fixture
def snapshot():
    return ContributionSnapshot([
        _link('Ann@x.com', 'alpha', 30, '2025-06-25', '2020-03-01', {'2020': 10, '2025': 20}),
        _link('ann@x.com', 'beta', 10, '2025-01-10', '2019-05-01', {'2019': 10}),
        _link('new@x.com', 'alpha', 8, '2025-06-29', '2025-02-01', {'2025': 8}),
        _link('gone@x.com', 'beta', 2, '2023-01-01', '2022-01-01', {'2022': 1, '2023': 1}),
    ])


def test_merges_links_per_identity(snapshot):
    rows = summarize_contributors(snapshot, TimeWindow(TODAY))
    assert [r.identity for r in rows] == ['Ann@x.com', 'new@x.com', 'gone@x.com']
    ann = rows[0].to_dict()
    assert ann['commits'] == 40
    assert ann['commits30'] == 2
    assert ann['firstCommitDate'] == '2019-05-01'
    assert ann['latestCommitDate'] == '2025-06-25'
    assert ann['projects'] == [{'project': 'alpha', 'commits': 30}, {'project': 'beta', 'commits': 10}]
    assert ann['share'] == pytest.approx(80.0)


def test_threshold_filters_contributors(snapshot):
    rows = summarize_contributors(snapshot, TimeWindow(TODAY), threshold_commits=5)
    assert [r.identity for r in rows] == ['Ann@x.com', 'new@x.com']


def test_share_is_zero_without_commits():
    snapshot = ContributionSnapshot([_link('a@x.com', 'p', 0, '2025-06-01', '2025-06-01')])
    rows = summarize_contributors(snapshot, TimeWindow(TODAY), threshold_commits=0)
    assert rows[0].share == 0.0


def test_contributor_counts(snapshot):
    window = TimeWindow(TODAY)
    counts = contributor_counts(summarize_contributors(snapshot, window), window)
    assert counts == {'recent30': 2, 'recent90': 2, 'recent180': 2, 'allTime': 3, 'rookies': 1}


def test_activity_per_year(snapshot):
    rows = summarize_contributors(snapshot, TimeWindow(TODAY))
    years = activity_per_year(rows)
    assert years[0] == {'year': '2019', 'commits': 10, 'contributors': 1}
    assert years[-1] == {'year': '2025', 'commits': 28, 'contributors': 2}
    assert [y['year'] for y in activity_per_year(rows, limit=2)] == ['2023', '2025']


def test_empty_snapshot():
    window = TimeWindow(TODAY)
    rows = summarize_contributors(ContributionSnapshot(), window)
    assert rows == []
    assert contributor_counts(rows, window)['allTime'] == 0
    assert activity_per_year(rows) == []


def test_repeated_link_counts_once():
    raw = {'contributorEmail': 'a@x.com', 'projectName': 'p', 'totalCommits': 10, 'commits30Days': 2, 'commits90Days': 4,
           'latestCommitDate': '2025-06-20', 'firstCommitDate': '2024-01-01', 'commitsPerYear': {'2025': 10}}
    variant = dict(raw, contributorEmail='A@X.com')
    window = TimeWindow(TODAY)
    once = summarize_contributors(load_snapshot({'contributors': [raw]}), window)
    twice = summarize_contributors(load_snapshot({'contributors': [raw, dict(raw), variant]}), window)
    assert [r.to_dict() for r in twice] == [r.to_dict() for r in once]
    row = twice[0].to_dict()
    assert (row['commits'], row['commits30'], row['commits90']) == (10, 2, 4)
    assert row['projects'] == [{'project': 'p', 'commits': 10}]
    assert activity_per_year(twice) == [{'year': '2025', 'commits': 10, 'contributors': 1}]
