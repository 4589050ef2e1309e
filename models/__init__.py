from models.timeslot import TimeSlot, Day, Hour
from models.teacher import Teacher
from models.subject import Subject
from models.room import Room, RoomGroup, RoomChoiceGroup
from models.school_class import SchoolClass, Division, Group
from models.course import Course, SuperCourse, SubCourse, Lesson, EpochPlan
from models.constraints import MAXWEIGHT, Constraint, ConstraintCollection
from models.school_data import TimetableData, SchoolInfo, InputError

__all__ = [
    "TimeSlot",
    "Day",
    "Hour",
    "Teacher",
    "Subject",
    "Room",
    "RoomGroup",
    "RoomChoiceGroup",
    "SchoolClass",
    "Division",
    "Group",
    "Course",
    "SuperCourse",
    "SubCourse",
    "Lesson",
    "EpochPlan",
    "MAXWEIGHT",
    "Constraint",
    "ConstraintCollection",
    "TimetableData",
    "SchoolInfo",
    "InputError",
]
