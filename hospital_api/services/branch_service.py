import logging
from sqlalchemy.orm import Session
from hospital_api.models.branch import Branch
from hospital_api.models.doctor import Doctor
from hospital_api.schemas.branch import BranchCreate, BranchUpdate, BranchResponse
from hospital_api.services.repository import Repository, commit, to_page
from hospital_api.services.cache_service import cache_service, BRANCHES_CACHE_GROUP, DOCTORS_CACHE_GROUP
from hospital_api.utils.errors import NotFoundError, ConflictError
from hospital_api.utils.messages import BranchMessages

logger = logging.getLogger(__name__)

branch_repository = Repository(Branch)
doctor_repository = Repository(Doctor)


class BranchService:
    @staticmethod
    def ensure_name_available(db: Session, name: str, exclude_id: int = None):
        criteria = [Branch.name == name]
        if exclude_id is not None:
            criteria.append(Branch.id != exclude_id)
        if branch_repository.get(db, *criteria):
            raise ConflictError(BranchMessages.NAME_EXISTS)

    @staticmethod
    def create_branch(db: Session, branch_data: BranchCreate) -> Branch:
        BranchService.ensure_name_available(db, branch_data.name)

        branch = branch_repository.add(db, Branch(**branch_data.model_dump()))
        commit(db, branch)
        cache_service.invalidate(BRANCHES_CACHE_GROUP)
        logger.info(f"Branch {branch.id} created: {branch.name}")
        return branch

    @staticmethod
    def get_branch_by_id(db: Session, branch_id: int) -> Branch:
        branch = branch_repository.get(db, Branch.id == branch_id)
        if not branch:
            raise NotFoundError(BranchMessages.NOT_FOUND)
        return branch

    @staticmethod
    def get_branch_by_name(db: Session, name: str) -> Branch:
        branch = branch_repository.get(db, Branch.name == name)
        if not branch:
            raise NotFoundError(BranchMessages.NOT_FOUND)
        return branch

    @staticmethod
    def get_all_branches(db: Session, skip: int = 0, limit: int = 100) -> dict:
        params = {"skip": skip, "limit": limit}
        cached = cache_service.get(BRANCHES_CACHE_GROUP, params)
        if cached is not None:
            return cached

        items, count = branch_repository.get_list(db, skip=skip, limit=limit)
        page = to_page(items, count, skip, limit, BranchResponse)
        cache_service.set(BRANCHES_CACHE_GROUP, params, page)
        return page

    @staticmethod
    def update_branch(db: Session, branch_id: int, branch_data: BranchUpdate) -> Branch:
        branch = BranchService.get_branch_by_id(db, branch_id)
        BranchService.ensure_name_available(db, branch_data.name, exclude_id=branch_id)

        branch_repository.update(db, branch, branch_data.model_dump())
        commit(db, branch)
        # doctor listings embed the branch name
        cache_service.invalidate(BRANCHES_CACHE_GROUP, DOCTORS_CACHE_GROUP)
        return branch

    @staticmethod
    def delete_branch(db: Session, branch_id: int) -> dict:
        branch = BranchService.get_branch_by_id(db, branch_id)
        if doctor_repository.get(db, Doctor.branch_id == branch_id):
            raise ConflictError(BranchMessages.HAS_DOCTORS)

        branch.mark_deleted()
        commit(db)
        cache_service.invalidate(BRANCHES_CACHE_GROUP)
        logger.info(f"Branch {branch_id} soft-deleted")
        return {"message": f"Branch {branch_id} deleted successfully"}
