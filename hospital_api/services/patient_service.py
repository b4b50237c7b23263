import logging
from sqlalchemy.orm import Session
from hospital_api.models.patient import Patient
from hospital_api.schemas.patient import PatientCreate, PatientUpdate, PatientResponse
from hospital_api.services.repository import Repository, commit, to_page
from hospital_api.utils.crypto import hash_value
from hospital_api.utils.errors import NotFoundError, ConflictError
from hospital_api.utils.messages import PatientMessages

logger = logging.getLogger(__name__)

patient_repository = Repository(Patient)


class PatientService:
    @staticmethod
    def create_patient(db: Session, patient_data: PatientCreate) -> Patient:
        identity_hash = hash_value(patient_data.national_identity)
        if patient_repository.get(db, Patient.national_identity_hash == identity_hash):
            logger.warning("Rejected patient registration with a duplicate identity number")
            raise ConflictError(PatientMessages.IDENTITY_EXISTS)

        patient = patient_repository.add(db, Patient(**patient_data.model_dump()))
        commit(db, patient)
        logger.info(f"Patient {patient.id} registered")
        return patient

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: int) -> Patient:
        patient = patient_repository.get(db, Patient.id == patient_id)
        if not patient:
            raise NotFoundError(PatientMessages.NOT_FOUND)
        return patient

    @staticmethod
    def get_all_patients(db: Session, skip: int = 0, limit: int = 100) -> dict:
        items, count = patient_repository.get_list(db, skip=skip, limit=limit)
        return to_page(items, count, skip, limit, PatientResponse)

    @staticmethod
    def update_patient(db: Session, patient_id: int, patient_data: PatientUpdate) -> Patient:
        patient = PatientService.get_patient_by_id(db, patient_id)
        patient_repository.update(db, patient, patient_data.model_dump(exclude_unset=True, exclude_none=True))
        commit(db, patient)
        return patient

    @staticmethod
    def delete_patient(db: Session, patient_id: int) -> dict:
        patient = PatientService.get_patient_by_id(db, patient_id)
        patient.mark_deleted()
        commit(db)
        logger.info(f"Patient {patient_id} soft-deleted")
        return {"message": f"Patient {patient_id} deleted successfully"}
