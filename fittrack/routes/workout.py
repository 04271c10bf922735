# fittrack/routes/workout.py
"""FitTrack API - Workout Routes (MongoDB)."""

from typing import List

from fastapi import APIRouter, Depends, status

from fittrack.dependencies import get_workout_store
from fittrack.schemas.workout import (
    WorkoutCreateRequest,
    WorkoutUpdateRequest,
    WorkoutOut,
    WorkoutCreatedResponse,
    WorkoutUpdatedResponse,
    MessageResponse,
)
from fittrack.services.workout_store import WorkoutStore

router = APIRouter()


@router.post(
    "/addWorkout",
    response_model=WorkoutCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_workout(
    request: WorkoutCreateRequest,
    store: WorkoutStore = Depends(get_workout_store)
):
    """Add a workout owned by the caller."""
    workout = await store.create(
        name=request.name,
        duration=request.duration,
        status=request.status,
        date_added=request.date_added,
    )
    return WorkoutCreatedResponse(workout=WorkoutOut.from_document(workout))


@router.get("/getMyWorkouts", response_model=List[WorkoutOut])
async def get_my_workouts(store: WorkoutStore = Depends(get_workout_store)):
    """List the caller's workouts as a bare array (empty when none)."""
    workouts = await store.list()
    return [WorkoutOut.from_document(w) for w in workouts]


@router.patch("/updateWorkout/{workout_id}", response_model=WorkoutUpdatedResponse)
async def update_workout(
    workout_id: str,
    request: WorkoutUpdateRequest,
    store: WorkoutStore = Depends(get_workout_store)
):
    """Overwrite the supplied fields of one of the caller's workouts."""
    workout = await store.update(workout_id, request.model_dump(exclude_none=True))
    return WorkoutUpdatedResponse(
        message="Workout updated successfully",
        updated_workout=WorkoutOut.from_document(workout),
    )


@router.delete("/deleteWorkout/{workout_id}", response_model=MessageResponse)
async def delete_workout(
    workout_id: str,
    store: WorkoutStore = Depends(get_workout_store)
):
    """Delete one of the caller's workouts."""
    await store.delete(workout_id)
    return MessageResponse(message="Workout deleted successfully")


@router.patch("/completeWorkoutStatus/{workout_id}", response_model=WorkoutUpdatedResponse)
async def complete_workout_status(
    workout_id: str,
    store: WorkoutStore = Depends(get_workout_store)
):
    """Mark one of the caller's workouts Completed."""
    workout = await store.complete(workout_id)
    return WorkoutUpdatedResponse(
        message="Workout marked as completed",
        updated_workout=WorkoutOut.from_document(workout),
    )
