from surveygenie.services.auth_service import AuthService
from surveygenie.services.response_service import ResponseService, build_response_tree
from surveygenie.services.survey_service import SurveyService, build_survey_tree
from surveygenie.services.user_service import UserService

__all__ = [
    "AuthService",
    "ResponseService",
    "SurveyService",
    "UserService",
    "build_response_tree",
    "build_survey_tree",
]
