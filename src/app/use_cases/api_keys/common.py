from src.domain.api_key import ApiKey
from src.domain.api_key_rules import mask_key_id
from .dtos import ApiKeyResponseDTO


def to_api_key_dto(api_key: ApiKey) -> ApiKeyResponseDTO:
    dto = ApiKeyResponseDTO.model_validate(api_key)
    return dto.model_copy(update={"key_id": mask_key_id(api_key.key_id)})
