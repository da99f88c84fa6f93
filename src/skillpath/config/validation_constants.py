"""
Validation Constants for the Assessment Wizard.

This module contains the constants used for validating wizard input and
AI responses. These constants define valid values, ranges, and constraints
for the profile fields, the assessment questions and the analysis bundle.
"""

# Wizard steps, in order (1-based when used as current_step)
STEP_NAMES = [
    "Background",
    "Assessment",
    "Gap Analysis",
    "Learning",
    "Study Plan",
    "Salary",
    "Profile",
]

# Number of wizard steps (N)
TOTAL_STEPS = len(STEP_NAMES)

# Steps with side effects in the controller
ASSESSMENT_STEP = 2
GAP_ANALYSIS_STEP = 3

# Valid question types
VALID_QUESTION_TYPES = {"rating", "single", "multiple", "text"}

# Question types that must carry options
OPTION_QUESTION_TYPES = {"single", "multiple"}

# Minimum number of options for single/multiple questions
MIN_QUESTION_OPTIONS = 2

# Rating questions use a fixed 1-5 integer scale
RATING_SCALE = range(1, 6)  # 1 to 5 inclusive

# Cap of simultaneous selections for multiple-choice questions
MAX_MULTIPLE_SELECTIONS = 3

# Valid skill gap priorities
VALID_GAP_PRIORITIES = {"Low", "Medium", "High"}

# Proficiency levels reported by the analyzer
VALID_SKILL_LEVELS = {"Beginner", "Intermediate", "Advanced", "Expert"}

# Valid upload buckets
VALID_UPLOAD_BUCKETS = {"resumes", "certificates"}

# Valid company sizes offered by the background form
VALID_COMPANY_SIZES = {"Small", "Medium", "Large", "Enterprise"}

# Age range accepted by the background form
VALID_AGE_RANGE = range(18, 101)  # 18 to 100 inclusive

# Salary multiplier used by the offline analysis
FALLBACK_SALARY_MULTIPLIER = 1.25

# Salary used by the offline analysis when the profile has none
FALLBACK_BASE_SALARY = 5000
