"""
Assignments router — Public listing, owner-only mutation.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from studyhard.core.security import get_current_user
from studyhard.core.database import get_supabase, parse_id, ASSIGNMENTS_TABLE
from studyhard.schemas.assignments import AssignmentCreate, AssignmentUpdate
from studyhard.utils.response import success_response, inserted_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["Assignments"])


def _require_valid_id(assignment_id: str) -> str:
    canonical = parse_id(assignment_id)
    if canonical is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid ID format",
        )
    return canonical


@router.get("")
async def list_assignments(
    difficulty: Optional[str] = None,
    db: Client = Depends(get_supabase),
):
    query = db.table(ASSIGNMENTS_TABLE).select("*")
    if difficulty:
        query = query.eq("difficulty", difficulty)
    result = query.execute()
    return success_response(data=result.data)


@router.post("")
async def create_assignment(
    body: AssignmentCreate,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    if body.email is not None and body.email != user["email"]:
        logger.warning("%s tried to create an assignment owned by %s", user["email"], body.email)
        raise HTTPException(status_code=403, detail="Owner email must match the signed-in user")

    data = {
        **body.model_dump(exclude_none=True),
        "email": user["email"],
    }
    result = db.table(ASSIGNMENTS_TABLE).insert(data).execute()
    logger.info("Assignment created by %s", user["email"])
    return inserted_response(result.data, message="Assignment created")


@router.get("/{assignment_id}")
async def get_assignment(
    assignment_id: str,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    assignment_id = _require_valid_id(assignment_id)

    result = (
        db.table(ASSIGNMENTS_TABLE)
        .select("*")
        .eq("id", assignment_id)
        .limit(1)
        .execute()
    )
    if not result.data:
        raise HTTPException(status_code=404, detail="Assignment not found")
    return success_response(data=result.data[0])


@router.put("/{assignment_id}")
async def update_assignment(
    assignment_id: str,
    body: AssignmentUpdate,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    assignment_id = _require_valid_id(assignment_id)

    updates = body.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    existing = (
        db.table(ASSIGNMENTS_TABLE)
        .select("email")
        .eq("id", assignment_id)
        .limit(1)
        .execute()
    )
    if not existing.data:
        raise HTTPException(status_code=404, detail="Assignment not found")

    if existing.data[0].get("email") != user["email"]:
        logger.warning(
            "%s tried to update assignment %s they do not own",
            user["email"], assignment_id,
        )
        raise HTTPException(status_code=403, detail="Permission denied")

    # Not transactional: a concurrent delete makes this match nothing
    result = (
        db.table(ASSIGNMENTS_TABLE)
        .update(updates)
        .eq("id", assignment_id)
        .execute()
    )
    logger.info("Assignment %s updated by %s", assignment_id, user["email"])
    return success_response(
        data={
            "modified_count": len(result.data),
            "record": result.data[0] if result.data else None,
        },
        message="Assignment updated",
    )


@router.delete("/{assignment_id}")
async def delete_assignment(
    assignment_id: str,
    user: dict = Depends(get_current_user),
    db: Client = Depends(get_supabase),
):
    assignment_id = _require_valid_id(assignment_id)

    # Single conditional delete; absence and foreign ownership look the same
    result = (
        db.table(ASSIGNMENTS_TABLE)
        .delete()
        .eq("id", assignment_id)
        .eq("email", user["email"])
        .execute()
    )
    if len(result.data) != 1:
        raise HTTPException(
            status_code=404,
            detail="Assignment not found or permission denied",
        )

    logger.info("Assignment %s deleted by %s", assignment_id, user["email"])
    return success_response(message="Assignment deleted")
