"""
Submissions router — Submit, list, and grade.

Any authenticated user may grade a submission except its own examinee.
Listings shown to people (mine / pending) are decorated with the title and
maximum marks of the referenced assignment.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from studyhard.core.security import get_current_user
from studyhard.core.database import (
    get_supabase,
    parse_id,
    ASSIGNMENTS_TABLE,
    SUBMISSIONS_TABLE,
)
from studyhard.schemas.assignments import SubmissionCreate, SubmissionGrade
from studyhard.utils.response import success_response, inserted_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Submissions"])


def _require_valid_id(submission_id: str) -> str:
    canonical = parse_id(submission_id)
    if canonical is None:
        raise HTTPException(status_code=400, detail="Invalid ID format")
    return canonical


def decorate_submissions(db: Client, submissions: list[dict]) -> list[dict]:
    """
    Copy title and marks from each referenced assignment onto its submissions.

    References are loose: malformed or dangling submit_ids leave the
    submission as it is.
    """
    refs = [parse_id(s.get("submit_id")) for s in submissions]
    assignment_ids = {ref for ref in refs if ref}
    if not assignment_ids:
        return submissions

    assignments = (
        db.table(ASSIGNMENTS_TABLE)
        .select("id, title, marks")
        .in_("id", sorted(assignment_ids))
        .execute()
    )
    assignment_map = {a["id"].lower(): a for a in assignments.data}

    for s, ref in zip(submissions, refs):
        assignment = assignment_map.get(ref)
        if assignment:
            s["title"] = assignment.get("title")
            s["marks"] = assignment.get("marks")
        else:
            logger.debug("Submission %s references no known assignment", s.get("id"))

    return submissions


@router.post("/submissions")
async def create_submission(
    body: SubmissionCreate,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    if body.examinee is not None and body.examinee != user["email"]:
        logger.warning("%s tried to submit as %s", user["email"], body.examinee)
        raise HTTPException(status_code=403, detail="Examinee email must match the signed-in user")

    data = {
        **body.model_dump(exclude_none=True),
        "examinee": user["email"],
    }
    result = db.table(SUBMISSIONS_TABLE).insert(data).execute()
    logger.info("Submission for %s created by %s", body.submit_id, user["email"])
    return inserted_response(result.data, message="Submission created")


@router.get("/submission")
async def list_submissions(
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    result = db.table(SUBMISSIONS_TABLE).select("*").execute()
    return success_response(data=result.data)


@router.get("/submission/{submission_id}")
async def get_submission(
    submission_id: str,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    submission_id = _require_valid_id(submission_id)

    result = (
        db.table(SUBMISSIONS_TABLE)
        .select("*")
        .eq("id", submission_id)
        .limit(1)
        .execute()
    )
    return success_response(data=result.data[0] if result.data else None)


@router.put("/submission/{submission_id}")
async def grade_submission(
    submission_id: str,
    body: SubmissionGrade,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    submission_id = _require_valid_id(submission_id)

    existing = (
        db.table(SUBMISSIONS_TABLE)
        .select("examinee, status")
        .eq("id", submission_id)
        .limit(1)
        .execute()
    )
    if not existing.data:
        raise HTTPException(status_code=404, detail="Submission not found")

    if existing.data[0].get("examinee") == user["email"]:
        logger.warning("%s tried to grade their own submission %s", user["email"], submission_id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can't mark your own submission.",
        )

    if existing.data[0].get("status") == "completed":
        raise HTTPException(status_code=400, detail="Submission already graded")

    result = (
        db.table(SUBMISSIONS_TABLE)
        .update({
            "obtainmarks": body.obtainmarks,
            "feedback": body.feedback,
            "status": body.status,
        })
        .eq("id", submission_id)
        .eq("status", "pending")
        .execute()
    )
    if len(result.data) != 1:
        raise HTTPException(status_code=400, detail="Failed to update submission")

    logger.info("Submission %s graded by %s", submission_id, user["email"])
    return success_response(data=result.data[0], message="Submission updated successfully")


@router.get("/mysubmission")
async def get_my_submissions(
    email: Optional[str] = None,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    email = email or user["email"]
    if email != user["email"]:
        logger.warning("%s asked for the submissions of %s", user["email"], email)
        raise HTTPException(status_code=403, detail="Forbidden access")

    result = (
        db.table(SUBMISSIONS_TABLE)
        .select("*")
        .eq("examinee", email)
        .execute()
    )
    return success_response(data=decorate_submissions(db, result.data))


@router.get("/pending-assignments")
async def get_pending_submissions(
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    result = (
        db.table(SUBMISSIONS_TABLE)
        .select("*")
        .eq("status", "pending")
        .execute()
    )
    return success_response(data=decorate_submissions(db, result.data))
