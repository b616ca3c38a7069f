"""Functional tests for issue creation, ordering and moves over HTTP."""

from __future__ import annotations

from typing import Dict, List

import pytest


def _issues_url(board_id: str, status_id: str) -> str:
    return f"/api/boards/{board_id}/statuses/{status_id}/issues"


def _create_status(client, board_id: str, title: str) -> Dict:
    resp = client.post(f"/api/boards/{board_id}/statuses", json={"title": title})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _create_issue(client, board_id: str, status_id: str, title: str, **position) -> Dict:
    body = {"title": title, "content": f"{title} content", **position}
    resp = client.post(_issues_url(board_id, status_id), json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _issue_ids(client, board_id: str, status_id: str) -> List[str]:
    resp = client.get(_issues_url(board_id, status_id))
    assert resp.status_code == 200, resp.text
    return [i["id"] for i in resp.json()]


@pytest.fixture
def three_by_three(client, board):
    """Three statuses each holding three appended issues."""
    statuses = []
    for s in range(3):
        status = _create_status(client, board["id"], f"Status {s + 1}")
        issues = [_create_issue(client, board["id"], status["id"], f"S{s + 1} issue {n + 1}") for n in range(3)]
        statuses.append({"status": status, "issues": issues})
    return statuses


def test_first_issue_in_empty_status_gets_middle_rank(client, board):
    status = _create_status(client, board["id"], "Todo")
    issue = _create_issue(client, board["id"], status["id"], "First")
    assert issue["rank"] == "0|hzzzzz:"
    assert issue["statusId"] == status["id"]
    assert issue["createdAt"]


def test_issues_append_in_creation_order(client, three_by_three, board):
    for entry in three_by_three:
        ids = _issue_ids(client, board["id"], entry["status"]["id"])
        assert ids == [i["id"] for i in entry["issues"]]
        ranks = [i["rank"] for i in entry["issues"]]
        assert ranks == sorted(ranks)


def test_create_with_neighbours(client, board):
    status = _create_status(client, board["id"], "Todo")
    first = _create_issue(client, board["id"], status["id"], "First")
    last = _create_issue(client, board["id"], status["id"], "Last", prevIssueId=first["id"])
    head = _create_issue(client, board["id"], status["id"], "Head", nextIssueId=first["id"])
    mid = _create_issue(client, board["id"], status["id"], "Mid", prevIssueId=first["id"], nextIssueId=last["id"])
    assert _issue_ids(client, board["id"], status["id"]) == [head["id"], first["id"], mid["id"], last["id"]]


def test_move_issue_between_neighbours_of_another_status(client, three_by_three, board):
    s1, s2 = three_by_three[0], three_by_three[1]
    moved = s1["issues"][0]
    resp = client.patch(
        f"{_issues_url(board['id'], s1['status']['id'])}/{moved['id']}",
        json={
            "statusId": s2["status"]["id"],
            "prevIssueId": s2["issues"][0]["id"],
            "nextIssueId": s2["issues"][1]["id"],
        },
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["statusId"] == s2["status"]["id"]

    assert _issue_ids(client, board["id"], s1["status"]["id"]) == [i["id"] for i in s1["issues"][1:]]
    assert _issue_ids(client, board["id"], s2["status"]["id"]) == [
        s2["issues"][0]["id"],
        moved["id"],
        s2["issues"][1]["id"],
        s2["issues"][2]["id"],
    ]
    # Issues left behind keep their ranks.
    remaining = client.get(_issues_url(board["id"], s1["status"]["id"])).json()
    assert [i["rank"] for i in remaining] == [i["rank"] for i in s1["issues"][1:]]


def test_move_with_reversed_neighbours_is_rejected(client, three_by_three, board):
    s1, s2 = three_by_three[0], three_by_three[1]
    moved = s1["issues"][0]
    resp = client.patch(
        f"{_issues_url(board['id'], s1['status']['id'])}/{moved['id']}",
        json={
            "statusId": s2["status"]["id"],
            "prevIssueId": s2["issues"][1]["id"],
            "nextIssueId": s2["issues"][0]["id"],
        },
    )
    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith("application/problem+json")
    body = resp.json()
    assert body["message"] == "Cannot determine issue's position when putting one in between"
    assert body["code"] == "POSITION_CANNOT_INSERT_BETWEEN"
    # Nothing moved.
    assert _issue_ids(client, board["id"], s1["status"]["id"]) == [i["id"] for i in s1["issues"]]


def test_append_after_issue_that_is_not_last_is_rejected(client, board):
    status = _create_status(client, board["id"], "Todo")
    issues = [_create_issue(client, board["id"], status["id"], f"Issue {n}") for n in range(5)]
    resp = client.post(
        _issues_url(board["id"], status["id"]),
        json={"title": "Late", "content": "late", "prevIssueId": issues[3]["id"]},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Cannot determine issue's position when appending it"
    assert body["detail"] == body["message"]
    assert body["status"] == 400
    assert len(_issue_ids(client, board["id"], status["id"])) == 5


def test_prepend_before_issue_that_is_not_first_is_rejected(client, board):
    status = _create_status(client, board["id"], "Todo")
    issues = [_create_issue(client, board["id"], status["id"], f"Issue {n}") for n in range(3)]
    resp = client.post(
        _issues_url(board["id"], status["id"]),
        json={"title": "Early", "content": "early", "nextIssueId": issues[1]["id"]},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Cannot determine issue's position when prepending it"


def test_unknown_neighbour_is_not_found(client, board):
    status = _create_status(client, board["id"], "Todo")
    _create_issue(client, board["id"], status["id"], "Only")
    resp = client.post(
        _issues_url(board["id"], status["id"]),
        json={"title": "New", "content": "new", "prevIssueId": "missing"},
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Issue not found"
    assert resp.json()["code"] == "POSITION_REFERENCE_NOT_FOUND"


def test_neighbour_from_another_status_is_not_found(client, three_by_three, board):
    s1, s2 = three_by_three[0], three_by_three[1]
    resp = client.post(
        _issues_url(board["id"], s1["status"]["id"]),
        json={"title": "New", "content": "new", "prevIssueId": s2["issues"][2]["id"]},
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Issue not found"


def test_reorder_within_status(client, board):
    status = _create_status(client, board["id"], "Todo")
    a, b, c = (_create_issue(client, board["id"], status["id"], t) for t in ("A", "B", "C"))
    resp = client.patch(
        f"{_issues_url(board['id'], status['id'])}/{c['id']}",
        json={"nextIssueId": a["id"]},
    )
    assert resp.status_code == 200, resp.text
    assert _issue_ids(client, board["id"], status["id"]) == [c["id"], a["id"], b["id"]]
    # The moved issue is no longer a sibling of itself, so "after B" means last.
    resp = client.patch(
        f"{_issues_url(board['id'], status['id'])}/{c['id']}",
        json={"prevIssueId": b["id"]},
    )
    assert resp.status_code == 200, resp.text
    assert _issue_ids(client, board["id"], status["id"]) == [a["id"], b["id"], c["id"]]


def test_edit_without_move_keeps_rank(client, board):
    status = _create_status(client, board["id"], "Todo")
    issue = _create_issue(client, board["id"], status["id"], "Draft")
    resp = client.patch(
        f"{_issues_url(board['id'], status['id'])}/{issue['id']}",
        json={"title": "Final", "content": "Done"},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["title"] == "Final"
    assert body["content"] == "Done"
    assert body["rank"] == issue["rank"]


def test_get_issue_and_missing_issue(client, board):
    status = _create_status(client, board["id"], "Todo")
    issue = _create_issue(client, board["id"], status["id"], "Lookup")
    resp = client.get(f"{_issues_url(board['id'], status['id'])}/{issue['id']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == issue["id"]
    missing = client.get(f"{_issues_url(board['id'], status['id'])}/nope")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Issue not found"
    assert missing.json()["code"] == "RESOURCE_NOT_FOUND"


def test_move_to_status_of_another_board_is_rejected(client, board):
    status = _create_status(client, board["id"], "Todo")
    issue = _create_issue(client, board["id"], status["id"], "Stay")
    other = client.post("/api/boards", json={"title": "Other"}).json()
    foreign = _create_status(client, other["id"], "Elsewhere")
    resp = client.patch(
        f"{_issues_url(board['id'], status['id'])}/{issue['id']}",
        json={"statusId": foreign["id"]},
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Status not found"


def test_blank_title_and_content_are_validation_errors(client, board):
    status = _create_status(client, board["id"], "Todo")
    resp = client.post(_issues_url(board["id"], status["id"]), json={"title": "  ", "content": "x"})
    assert resp.status_code == 422
    assert resp.json()["message"] == "You have to give your issue a title"
    resp = client.post(_issues_url(board["id"], status["id"]), json={"title": "x"})
    assert resp.status_code == 422
    assert resp.json()["message"] == "You have to give your issue some content"
