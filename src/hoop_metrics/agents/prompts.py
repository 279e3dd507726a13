"""Prompt templates for the AI trainer."""

import json

from ..models.session import WorkoutSession
from ..models.user import UserProfile

WORKOUT_COACH_SYSTEM = """You are an elite basketball training AI coach specializing in personalized workout generation. You understand GOATA movement methodology, basketball-specific training, and how to adapt workouts based on user data, recovery metrics, and performance history.

Your workouts should:
1. Be basketball-specific and functional
2. Consider the user's experience level and recovery status
3. Include proper warm-up, main work, and cool-down phases
4. Incorporate GOATA movement principles when appropriate
5. Be progressive and challenging but safe
6. Include specific coaching cues and form tips

Always respond with a single JSON object containing the workout structure and nothing else."""

TRAINING_ANALYST_SYSTEM = """You are an AI basketball training analyst. Analyze user workout data and provide actionable insights about their training patterns, progress, and areas for improvement. Focus on:

1. Performance trends and patterns
2. Recovery recommendations
3. Skill development priorities
4. Training load optimization
5. Motivation and goal-setting advice

Be encouraging but realistic, and always provide specific, actionable recommendations. Respond with a single JSON object and nothing else."""

WORKOUT_FORMAT = """{
  "name": "Workout Name",
  "description": "Brief description of the workout",
  "duration": 45,
  "difficulty": "intermediate",
  "workout_type": "skills",
  "intensity_level": 8,
  "expected_hr_zone": "Zone 4-5",
  "phases": [
    {
      "name": "Dynamic Warm-up",
      "duration": 8,
      "description": "GOATA movement prep",
      "exercises": [
        {
          "name": "Exercise name",
          "duration": 2,
          "instructions": "Detailed instructions",
          "tips": "Coaching tips"
        }
      ]
    }
  ],
  "coaching_notes": "Overall coaching advice and tips",
  "goata_focus": "Specific GOATA methodology focus areas"
}"""

INSIGHTS_FORMAT = """{
  "overall_progress": "Assessment of overall progress",
  "training_consistency": "Analysis of training consistency",
  "performance_trends": [
    {
      "metric": "Heart Rate",
      "trend": "improving",
      "insight": "Detailed insight about this metric"
    }
  ],
  "recommendations": [
    {
      "category": "Training",
      "priority": "high",
      "recommendation": "Specific actionable advice"
    }
  ],
  "next_week_focus": "What to focus on in the coming week",
  "motivational_note": "Encouraging message based on their progress"
}"""

DEFAULT_EQUIPMENT = ["basketball", "cones", "ladder"]


def format_profile(profile: UserProfile | None) -> str:
    """Profile lines shared by both prompts."""
    if profile is None:
        profile = UserProfile(user_id="")
    lines = [
        f"- Experience Level: {profile.experience.value}",
        f"- Age: {profile.age or 'not specified'}",
        f"- Current Streak: {profile.current_streak} days",
        f"- Total Workouts: {profile.total_workouts}",
        f"- Skill Level: {profile.skill_level}",
        f"- Recovery Score: {profile.recovery_score:g}%",
    ]
    return "\n".join(lines)


def build_workout_prompt(
    profile: UserProfile | None,
    stats: dict | None = None,
    preferences: dict | None = None,
) -> str:
    stats = stats or {}
    preferences = preferences or {}

    average_hr = stats.get("average_heart_rate") or "not available"
    equipment = preferences.get("equipment") or DEFAULT_EQUIPMENT

    return f"""Generate a personalized basketball workout based on the following user data:

User Profile:
{format_profile(profile)}

Current Stats:
- Total Points: {stats.get("total_points", 0)}
- Average Heart Rate: {average_hr} BPM
- Recovery Score: {stats.get("recovery_score", 75)}%

Workout Preferences:
- Desired Duration: {preferences.get("duration") or 45} minutes
- Intensity Level: {preferences.get("intensity") or "moderate"}
- Focus Area: {preferences.get("focus_area") or "overall skills"}
- Available Equipment: {", ".join(equipment)}

Please generate a detailed workout plan in the following JSON format:
{WORKOUT_FORMAT}"""


def build_insights_prompt(
    sessions: list[WorkoutSession],
    profile: UserProfile | None,
) -> str:
    sessions_data = [session.get_summary() for session in sessions]

    return f"""Analyze this user's recent basketball training data and provide personalized insights:

User Profile:
{format_profile(profile)}

Recent Workout Sessions:
{json.dumps(sessions_data, indent=2)}

Please provide insights in the following JSON format:
{INSIGHTS_FORMAT}"""
