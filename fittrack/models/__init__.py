"""
ORM models
"""
from fittrack.models.user import User, Profile, BodyMeasurement, UserRole, Gender, ActivityLevel, FitnessGoal
from fittrack.models.exercise import Exercise, MuscleGroup, Equipment, Difficulty
from fittrack.models.workout import Workout, WorkoutExercise, WorkoutLog, ExerciseLog, SetLog
from fittrack.models.nutrition import Food, NutritionLog, MealType
from fittrack.models.achievement import Achievement, AchievementType, AchievementTier
from fittrack.models.trainer import TrainerProfile, Course, Enrollment

__all__ = [
    "User",
    "Profile",
    "BodyMeasurement",
    "UserRole",
    "Gender",
    "ActivityLevel",
    "FitnessGoal",
    # Catalog
    "Exercise",
    "MuscleGroup",
    "Equipment",
    "Difficulty",
    "Food",
    # Training
    "Workout",
    "WorkoutExercise",
    "WorkoutLog",
    "ExerciseLog",
    "SetLog",
    # Nutrition
    "NutritionLog",
    "MealType",
    # Achievements
    "Achievement",
    "AchievementType",
    "AchievementTier",
    # Trainers
    "TrainerProfile",
    "Course",
    "Enrollment",
]
