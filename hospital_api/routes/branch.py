from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from hospital_api.config.database import get_db
from hospital_api.schemas.branch import BranchCreate, BranchUpdate, BranchResponse
from hospital_api.schemas.common import Page, MessageResponse
from hospital_api.services.branch_service import BranchService
from hospital_api.utils.security import require_roles, OperationClaims

router = APIRouter(prefix="/branches", tags=["Branches"])

can_write = Depends(require_roles(OperationClaims.BRANCHES_WRITE))

@router.post(
    "/",
    response_model=BranchResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_write],
    responses={409: {"description": "A branch with this name already exists"}}
)
def create_branch(branch: BranchCreate, db: Session = Depends(get_db)):
    """Create a new branch (medical department)"""
    return BranchService.create_branch(db, branch)

@router.get("/by-name/{name}", response_model=BranchResponse)
def get_branch_by_name(name: str, db: Session = Depends(get_db)):
    """Get a branch by its exact name"""
    return BranchService.get_branch_by_name(db, name)

@router.get("/{branch_id}", response_model=BranchResponse)
def get_branch(branch_id: int, db: Session = Depends(get_db)):
    """Get branch by ID"""
    return BranchService.get_branch_by_id(db, branch_id)

@router.get("/", response_model=Page[BranchResponse])
def get_all_branches(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get all branches with pagination"""
    return BranchService.get_all_branches(db, skip, limit)

@router.put("/{branch_id}", response_model=BranchResponse, dependencies=[can_write])
def update_branch(branch_id: int, branch: BranchUpdate, db: Session = Depends(get_db)):
    """Rename a branch"""
    return BranchService.update_branch(db, branch_id, branch)

@router.delete("/{branch_id}", response_model=MessageResponse, dependencies=[can_write])
def delete_branch(branch_id: int, db: Session = Depends(get_db)):
    """Delete a branch that no active doctor belongs to"""
    return BranchService.delete_branch(db, branch_id)
