"""initial_schema

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 10:12:41.503117

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c9a7d2b10'
down_revision = None
branch_labels = None
depends_on = None

DIFFICULTY = ('BEGINNER', 'INTERMEDIATE', 'ADVANCED', 'EXPERT')


def _timestamps(updated: bool = True):
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False))
    return columns


def _difficulty() -> sa.Enum:
    return sa.Enum(*DIFFICULTY, name='difficulty', native_enum=False)


def upgrade() -> None:
    # Accounts
    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=True),
        sa.Column('password_hash', sa.String(255), nullable=True, comment='bcrypt hash'),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('image', sa.String(500), nullable=True, comment='Avatar URL'),
        sa.Column('role', sa.Enum('ADMIN', 'TRAINER', 'USER', name='userrole', native_enum=False), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table('profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('gender', sa.Enum('MALE', 'FEMALE', 'OTHER', 'PREFER_NOT_TO_SAY', name='gender', native_enum=False), nullable=True),
        sa.Column('height', sa.Float(), nullable=True, comment='Height (cm)'),
        sa.Column('current_weight', sa.Float(), nullable=True, comment='Weight (kg)'),
        sa.Column('target_weight', sa.Float(), nullable=True, comment='Target weight (kg)'),
        sa.Column('activity_level', sa.Enum(
            'SEDENTARY', 'LIGHTLY_ACTIVE', 'MODERATELY_ACTIVE', 'VERY_ACTIVE', 'EXTRA_ACTIVE',
            name='activitylevel', native_enum=False), nullable=True),
        sa.Column('fitness_goal', sa.Enum(
            'LOSE_WEIGHT', 'GAIN_MUSCLE', 'MAINTAIN_WEIGHT', 'IMPROVE_ENDURANCE', 'GENERAL_FITNESS',
            name='fitnessgoal', native_enum=False), nullable=True),
        sa.Column('bmi', sa.Float(), nullable=True),
        sa.Column('bmr', sa.Float(), nullable=True, comment='Basal metabolic rate (kcal)'),
        sa.Column('tdee', sa.Float(), nullable=True, comment='Total daily energy expenditure (kcal)'),
        sa.Column('target_calories', sa.Integer(), nullable=True),
        sa.Column('target_protein', sa.Integer(), nullable=True),
        sa.Column('target_carbs', sa.Integer(), nullable=True),
        sa.Column('target_fats', sa.Integer(), nullable=True),
        sa.Column('use_custom_targets', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('body_measurements',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=True, comment='kg'),
        sa.Column('body_fat', sa.Float(), nullable=True, comment='%'),
        sa.Column('muscle_mass', sa.Float(), nullable=True, comment='kg'),
        sa.Column('chest', sa.Float(), nullable=True, comment='cm'),
        sa.Column('waist', sa.Float(), nullable=True, comment='cm'),
        sa.Column('hips', sa.Float(), nullable=True, comment='cm'),
        sa.Column('arms', sa.Float(), nullable=True, comment='cm'),
        sa.Column('thighs', sa.Float(), nullable=True, comment='cm'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('measured_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_body_measurements_user_id', 'body_measurements', ['user_id'], unique=False)
    op.create_index('ix_body_measurements_measured_at', 'body_measurements', ['measured_at'], unique=False)

    # Catalogs
    op.create_table('exercises',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('muscle_groups', sa.JSON(), nullable=False),
        sa.Column('equipment', sa.JSON(), nullable=False),
        sa.Column('difficulty', _difficulty(), nullable=False),
        sa.Column('video_url', sa.String(500), nullable=True),
        sa.Column('thumbnail_url', sa.String(500), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_exercises_name', 'exercises', ['name'], unique=False)

    op.create_table('foods',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('calories', sa.Float(), nullable=False, comment='kcal / 100 g'),
        sa.Column('protein', sa.Float(), nullable=False, comment='g / 100 g'),
        sa.Column('carbs', sa.Float(), nullable=False, comment='g / 100 g'),
        sa.Column('fats', sa.Float(), nullable=False, comment='g / 100 g'),
        sa.Column('fiber', sa.Float(), nullable=True, comment='g / 100 g'),
        sa.Column('sugar', sa.Float(), nullable=True, comment='g / 100 g'),
        sa.Column('serving_size', sa.Float(), nullable=True),
        sa.Column('serving_unit', sa.String(20), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_foods_name', 'foods', ['name'], unique=False)

    # Training
    op.create_table('workouts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('difficulty', _difficulty(), nullable=False),
        sa.Column('estimated_time', sa.Integer(), nullable=True, comment='Minutes'),
        sa.Column('is_template', sa.Boolean(), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_workouts_name', 'workouts', ['name'], unique=False)
    op.create_index('ix_workouts_created_by', 'workouts', ['created_by'], unique=False)

    op.create_table('workout_exercises',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('workout_id', sa.Uuid(), nullable=False),
        sa.Column('exercise_id', sa.Uuid(), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True, comment='Seconds'),
        sa.Column('rest', sa.Integer(), nullable=True, comment='Seconds between sets'),
        sa.Column('notes', sa.String(500), nullable=True),
        sa.ForeignKeyConstraint(['workout_id'], ['workouts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_workout_exercises_workout_id', 'workout_exercises', ['workout_id'], unique=False)

    op.create_table('workout_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('workout_id', sa.Uuid(), nullable=True),
        sa.Column('title', sa.String(200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True, comment='Minutes'),
        sa.Column('current_exercise_order', sa.Integer(), nullable=True),
        sa.Column('current_set_number', sa.Integer(), nullable=True),
        sa.Column('rest_until', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['workout_id'], ['workouts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_workout_logs_user_id', 'workout_logs', ['user_id'], unique=False)
    op.create_index('ix_workout_logs_workout_id', 'workout_logs', ['workout_id'], unique=False)
    op.create_index('ix_workout_logs_completed_at', 'workout_logs', ['completed_at'], unique=False)

    op.create_table('exercise_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('workout_log_id', sa.Uuid(), nullable=False),
        sa.Column('exercise_id', sa.Uuid(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['workout_log_id'], ['workout_logs.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('workout_log_id', 'exercise_id', name='uq_exercise_log_per_session')
    )
    op.create_index('ix_exercise_logs_workout_log_id', 'exercise_logs', ['workout_log_id'], unique=False)
    op.create_index('ix_exercise_logs_exercise_id', 'exercise_logs', ['exercise_id'], unique=False)

    op.create_table('set_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('exercise_log_id', sa.Uuid(), nullable=False),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True, comment='kg'),
        sa.Column('duration', sa.Integer(), nullable=True, comment='Seconds'),
        sa.Column('distance', sa.Float(), nullable=True, comment='Metres'),
        sa.Column('completed', sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['exercise_log_id'], ['exercise_logs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_set_logs_exercise_log_id', 'set_logs', ['exercise_log_id'], unique=False)

    # Nutrition
    op.create_table('nutrition_logs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('food_id', sa.Uuid(), nullable=False),
        sa.Column('meal_type', sa.Enum('BREAKFAST', 'LUNCH', 'DINNER', 'SNACK', name='mealtype', native_enum=False), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False, comment='Grams'),
        sa.Column('calories', sa.Float(), nullable=False),
        sa.Column('protein', sa.Float(), nullable=False),
        sa.Column('carbs', sa.Float(), nullable=False),
        sa.Column('fats', sa.Float(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('consumed_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['food_id'], ['foods.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_nutrition_logs_user_id', 'nutrition_logs', ['user_id'], unique=False)
    op.create_index('ix_nutrition_logs_consumed_at', 'nutrition_logs', ['consumed_at'], unique=False)

    # Achievements
    op.create_table('achievements',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('code', sa.String(50), nullable=False, comment='Catalogue key'),
        sa.Column('type', sa.Enum(
            'WORKOUT_COUNT', 'STREAK', 'VOLUME', 'DURATION', 'CONSISTENCY', 'PERSONAL_RECORD',
            'VARIETY', 'EARLY_BIRD', 'NIGHT_OWL', 'WEEKEND_WARRIOR', 'NUTRITION',
            name='achievementtype', native_enum=False), nullable=False),
        sa.Column('tier', sa.Enum(
            'BRONZE', 'SILVER', 'GOLD', 'PLATINUM', 'DIAMOND',
            name='achievementtier', native_enum=False), nullable=False),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('description', sa.String(255), nullable=False),
        sa.Column('icon', sa.String(16), nullable=True),
        sa.Column('target', sa.Integer(), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=False),
        sa.Column('is_unlocked', sa.Boolean(), nullable=False),
        sa.Column('unlocked_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'code', name='uq_achievement_user_code')
    )
    op.create_index('ix_achievements_user_id', 'achievements', ['user_id'], unique=False)

    # Trainers
    op.create_table('trainer_profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('specializations', sa.JSON(), nullable=False),
        sa.Column('certifications', sa.JSON(), nullable=False),
        sa.Column('years_experience', sa.Integer(), nullable=True),
        sa.Column('hourly_rate', sa.Float(), nullable=True),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )

    op.create_table('courses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('trainer_id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('short_description', sa.String(300), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(50), nullable=True),
        sa.Column('difficulty', _difficulty(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True, comment='Weeks'),
        sa.Column('thumbnail_url', sa.String(500), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['trainer_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_courses_trainer_id', 'courses', ['trainer_id'], unique=False)
    op.create_index('ix_courses_category', 'courses', ['category'], unique=False)

    op.create_table('enrollments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('course_id', sa.Uuid(), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'course_id', name='uq_enrollment_user_course')
    )
    op.create_index('ix_enrollments_user_id', 'enrollments', ['user_id'], unique=False)
    op.create_index('ix_enrollments_course_id', 'enrollments', ['course_id'], unique=False)


def downgrade() -> None:
    op.drop_table('enrollments')
    op.drop_table('courses')
    op.drop_table('trainer_profiles')
    op.drop_table('achievements')
    op.drop_table('nutrition_logs')
    op.drop_table('set_logs')
    op.drop_table('exercise_logs')
    op.drop_table('workout_logs')
    op.drop_table('workout_exercises')
    op.drop_table('workouts')
    op.drop_table('foods')
    op.drop_table('exercises')
    op.drop_table('body_measurements')
    op.drop_table('profiles')
    op.drop_table('users')
