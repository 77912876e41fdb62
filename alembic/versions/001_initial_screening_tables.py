"""Create schools, screeners, students and screening_results

Revision ID: 001_initial_screening_tables
Revises:
Create Date: 2025-08-04 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_screening_tables'
down_revision = None
branch_labels = None
depends_on = None

TESTS = ('vision', 'hearing', 'acanthosis', 'scoliosis')
PHASES = ('initial', 'rescreen')


def _phase_columns(test, phase):
    prefix = f'{test}_{phase}'
    columns = [
        sa.Column(f'{prefix}_screener', sa.String(), nullable=True),
        sa.Column(f'{prefix}_date', sa.Date(), nullable=True),
    ]
    if test == 'vision':
        columns += [
            sa.Column(f'{prefix}_glasses', sa.String(16), nullable=True),
            sa.Column(f'{prefix}_right_eye', sa.String(16), nullable=True),
            sa.Column(f'{prefix}_left_eye', sa.String(16), nullable=True),
        ]
    columns.append(sa.Column(f'{prefix}_result', sa.String(16), nullable=True))
    if test == 'hearing':
        columns += [
            sa.Column(f'{prefix}_{ear}_{freq}', sa.String(8), nullable=True)
            for ear in ('right', 'left') for freq in (1000, 2000, 4000)
        ]
    if test == 'scoliosis':
        columns.append(sa.Column(f'{prefix}_observations', sa.Text(), nullable=True))
    return columns


def _completion_column(test):
    return sa.Column(
        f'{test}_complete',
        sa.Boolean(),
        sa.Computed(
            f"coalesce(lower(trim({test}_initial_result)) = 'pass', false) "
            f"OR {test}_rescreen_result IS NOT NULL",
            persisted=True,
        ),
    )


def upgrade():
    op.create_table(
        'schools',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_schools_id', 'schools', ['id'])
    op.create_index('ix_schools_name', 'schools', ['name'], unique=True)

    op.create_table(
        'screeners',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_screeners_id', 'screeners', ['id'])
    op.create_index('ix_screeners_name', 'screeners', ['name'])

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('unique_id', sa.String(16), nullable=False),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('grade', sa.String(32), nullable=True),
        sa.Column('gender', sa.String(16), nullable=True),
        sa.Column('school', sa.String(), nullable=True),
        sa.Column('teacher', sa.String(), nullable=True),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('status', sa.String(16), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_unique_id', 'students', ['unique_id'], unique=True)
    op.create_index('ix_students_last_name', 'students', ['last_name'])
    op.create_index('ix_students_school', 'students', ['school'])

    test_columns = []
    for test in TESTS:
        for phase in PHASES:
            test_columns += _phase_columns(test, phase)
        if test in ('vision', 'hearing'):
            test_columns.append(sa.Column(f'{test}_overall', sa.String(8), nullable=True))

    op.create_table(
        'screening_results',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('unique_id', sa.String(16), nullable=True),
        sa.Column('student_first_name', sa.String(), nullable=True),
        sa.Column('student_last_name', sa.String(), nullable=True),
        sa.Column('student_grade', sa.String(32), nullable=True),
        sa.Column('student_gender', sa.String(16), nullable=True),
        sa.Column('student_school', sa.String(), nullable=True),
        sa.Column('student_teacher', sa.String(), nullable=True),
        sa.Column('student_dob', sa.Date(), nullable=True),
        sa.Column('student_status', sa.String(16), nullable=True),
        sa.Column('screening_year', sa.Integer(), nullable=True),
        sa.Column('initial_screening_date', sa.Date(), nullable=True),
        sa.Column('was_absent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('initial_notes', sa.Text(), nullable=True),
        sa.Column('rescreen_notes', sa.Text(), nullable=True),
        *[sa.Column(f'{test}_required', sa.Boolean(), nullable=True) for test in TESTS],
        *test_columns,
        *[_completion_column(test) for test in TESTS],
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('student_id', name='uq_screening_results_student_id'),
    )
    op.create_index('ix_screening_results_id', 'screening_results', ['id'])
    op.create_index('ix_screening_results_student_id', 'screening_results', ['student_id'])
    op.create_index('ix_screening_results_unique_id', 'screening_results', ['unique_id'])
    op.create_index('ix_screening_results_screening_year', 'screening_results', ['screening_year'])


def downgrade():
    op.drop_table('screening_results')
    op.drop_table('students')
    op.drop_table('screeners')
    op.drop_table('schools')
