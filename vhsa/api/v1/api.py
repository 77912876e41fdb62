from fastapi import APIRouter

from vhsa.api.v1.endpoints import schools
from vhsa.api.v1.endpoints import screeners
from vhsa.api.v1.endpoints import students
from vhsa.api.v1.endpoints import screenings

api_router = APIRouter()

api_router.include_router(schools.router, prefix="/schools", tags=["schools"])
api_router.include_router(screeners.router, prefix="/screeners", tags=["screeners"])
api_router.include_router(students.router, prefix="/students", tags=["students"])
api_router.include_router(screenings.router, prefix="/screenings", tags=["screenings"])
