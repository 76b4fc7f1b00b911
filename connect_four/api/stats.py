from fastapi import APIRouter, HTTPException, status

from connect_four.services.statistics import GameStatistics, statistics_tracker

router = APIRouter()


@router.get("", response_model=GameStatistics)
async def get_statistics():
    """Aggregated results of every game finished since startup."""
    return statistics_tracker.stats


@router.delete("/reset", response_model=GameStatistics, status_code=status.HTTP_200_OK)
async def reset_statistics(confirmation: str):
    """
    Clears all statistics.
    Query Param 'confirmation' must equal 'RESET-STATISTICS'.
    """
    if confirmation != "RESET-STATISTICS":
        raise HTTPException(
            status_code=400,
            detail="Invalid confirmation string. Operation aborted."
        )
    statistics_tracker.reset()
    return statistics_tracker.stats
