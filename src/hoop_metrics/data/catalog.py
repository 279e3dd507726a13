"""Built-in catalog: workouts, fitness plans, achievements and sample inbox items."""

# Workout templates. Exercise reps/sets are numeric where the drill has a
# count; timed drills use duration (seconds) instead.
SEED_WORKOUTS = [
    {
        "name": "GOATA Foundation Flow",
        "description": "Core GOATA movement patterns focusing on spiral alignment and myofascial release",
        "methodology": "goata",
        "difficulty": "beginner",
        "workout_type": "recovery",
        "duration": 45,
        "is_popular": True,
        "exercises": [
            {"name": "Walking Backwards", "duration": 120, "tips": "Heel to toe, focus on posterior chain activation"},
            {"name": "Forward Fold Flow", "sets": 1, "reps": 10, "tips": "Spiral down through the chain"},
            {"name": "Glute Spiral Activation", "sets": 2, "reps": 15, "tips": "Feel the spiral through the hip"},
            {"name": "Single Leg Balance", "sets": 2, "duration": 30, "tips": "Maintain spiral alignment"},
        ],
    },
    {
        "name": "GOATA Athletic Power",
        "description": "Advanced GOATA patterns for explosive power development and athletic performance",
        "methodology": "goata",
        "difficulty": "advanced",
        "workout_type": "strength",
        "duration": 60,
        "exercises": [
            {"name": "Spiral Medicine Ball Throws", "sets": 2, "reps": 8, "tips": "Full body spiral power"},
            {"name": "Single Leg Deadlift to Sprint", "sets": 2, "reps": 6, "tips": "Explosive spiral extension"},
            {"name": "Rotational Band Pulls", "sets": 2, "reps": 12, "tips": "Maintain spiral integrity"},
            {"name": "Backward Bear Crawl", "sets": 1, "reps": 20, "tips": "Posterior chain dominance"},
        ],
    },
    {
        "name": "Soviet Strength Foundation",
        "description": "Classic Soviet block periodization focusing on maximum strength development",
        "methodology": "soviet",
        "difficulty": "intermediate",
        "workout_type": "strength",
        "duration": 90,
        "exercises": [
            {"name": "Back Squat", "sets": 5, "reps": 5, "rest_time": 210, "tips": "3-4 minute rest between sets"},
            {"name": "Romanian Deadlift", "sets": 4, "reps": 6, "tips": "Focus on posterior chain"},
            {"name": "Overhead Press", "sets": 4, "reps": 5, "tips": "Strict form, no leg drive"},
            {"name": "Pendlay Rows", "sets": 4, "reps": 6, "tips": "Explosive pull, controlled negative"},
        ],
    },
    {
        "name": "Soviet Power Development",
        "description": "Olympic lifting variations and explosive power training from Soviet methodology",
        "methodology": "soviet",
        "difficulty": "advanced",
        "workout_type": "strength",
        "duration": 75,
        "exercises": [
            {"name": "Power Clean", "sets": 6, "reps": 3, "tips": "Focus on bar speed"},
            {"name": "Front Squat", "sets": 5, "reps": 3, "tips": "Maximum load with perfect form"},
            {"name": "Push Press", "sets": 4, "reps": 4, "tips": "Drive through legs first"},
            {"name": "Snatch Pulls", "sets": 4, "reps": 5, "tips": "Explosive triple extension"},
        ],
    },
    {
        "name": "NBA On-Court Skills",
        "description": "Professional basketball skill development focused on game situations",
        "methodology": "nba",
        "difficulty": "intermediate",
        "workout_type": "skills",
        "duration": 60,
        "is_popular": True,
        "exercises": [
            {"name": "Cone Dribbling Series", "sets": 5, "tips": "Both hands, game speed"},
            {"name": "Defensive Slide Ladder", "sets": 4, "duration": 20, "tips": "Low stance, quick feet"},
            {"name": "Shooting Off Movement", "reps": 100, "tips": "Game spots, various angles"},
            {"name": "1v1 Finishing", "sets": 2, "reps": 15, "tips": "Contact finishes at rim"},
        ],
    },
    {
        "name": "NBA Conditioning Circuit",
        "description": "High-intensity conditioning matching NBA game demands",
        "methodology": "nba",
        "difficulty": "advanced",
        "workout_type": "cardio",
        "duration": 45,
        "exercises": [
            {"name": "Suicide Sprints", "reps": 10, "tips": "Touch each line, full sprint"},
            {"name": "Transition 3s", "reps": 20, "tips": "Sprint to spot, shoot, repeat"},
            {"name": "Defensive Shell Drill", "sets": 5, "duration": 45, "tips": "Communication required"},
            {"name": "Full Court Layups", "duration": 120, "tips": "Both hands, no misses"},
        ],
    },
    {
        "name": "Athletic Movement Prep",
        "description": "Dynamic warm-up and movement preparation for any sport or activity",
        "methodology": "mixed",
        "difficulty": "beginner",
        "workout_type": "mixed",
        "duration": 30,
        "is_popular": True,
        "exercises": [
            {"name": "Leg Swings", "sets": 2, "reps": 10, "tips": "Front/back and side to side"},
            {"name": "Arm Circles", "sets": 2, "reps": 10, "tips": "Gradually increase size"},
            {"name": "Walking High Knees", "reps": 20, "tips": "Drive knee to chest"},
            {"name": "Butt Kicks", "reps": 20, "tips": "Heel to glute contact"},
            {"name": "Side Shuffles", "sets": 2, "reps": 10, "tips": "Stay low, don't cross feet"},
        ],
    },
]


# Plans reference workouts by name; entries are (week, day, workout name).
SEED_PLANS = [
    {
        "name": "GOATA Movement Reset",
        "description": "Four weeks of spiral-alignment work building into explosive athletic patterns",
        "methodology": "GOATA",
        "plan_type": "mixed",
        "difficulty": "beginner",
        "duration": 4,
        "workouts_per_week": 2,
        "is_popular": True,
        "schedule": [
            (week, day, name)
            for week in range(1, 5)
            for day, name in (
                (1, "GOATA Foundation Flow"),
                (4, "Athletic Movement Prep" if week < 3 else "GOATA Athletic Power"),
            )
        ],
    },
    {
        "name": "Soviet Off-Season Block",
        "description": "Block periodization: accumulation into intensification over six weeks",
        "methodology": "Soviet",
        "plan_type": "strength",
        "difficulty": "intermediate",
        "duration": 6,
        "workouts_per_week": 3,
        "schedule": [
            (week, day, name)
            for week in range(1, 7)
            for day, name in (
                (1, "Soviet Strength Foundation"),
                (3, "Athletic Movement Prep"),
                (5, "Soviet Strength Foundation" if week <= 3 else "Soviet Power Development"),
            )
        ],
    },
    {
        "name": "NBA Pre-Season Prep",
        "description": "Court skills and game-speed conditioning to get ready for the season",
        "methodology": "NBA",
        "plan_type": "basketball",
        "difficulty": "advanced",
        "duration": 3,
        "workouts_per_week": 3,
        "is_popular": True,
        "schedule": [
            (week, day, name)
            for week in range(1, 4)
            for day, name in (
                (1, "NBA On-Court Skills"),
                (3, "NBA Conditioning Circuit"),
                (5, "NBA On-Court Skills"),
            )
        ],
    },
]


SEED_ACHIEVEMENTS = [
    {
        "name": "First Bucket",
        "description": "Complete your first workout",
        "category": "milestone",
        "requirement": {"total_workouts": 1},
        "points": 10,
    },
    {
        "name": "Double Digits",
        "description": "Complete 10 workouts",
        "category": "milestone",
        "requirement": {"total_workouts": 10},
        "points": 50,
    },
    {
        "name": "Gym Rat",
        "description": "Complete 50 workouts",
        "category": "milestone",
        "requirement": {"total_workouts": 50},
        "points": 200,
    },
    {
        "name": "On Fire",
        "description": "Train on 3 consecutive days",
        "category": "streak",
        "requirement": {"day_streak": 3},
        "points": 30,
    },
    {
        "name": "Locked In",
        "description": "Train on 7 consecutive days",
        "category": "streak",
        "requirement": {"day_streak": 7},
        "points": 100,
    },
    {
        "name": "Triple Double",
        "description": "Reach 1000 total points",
        "category": "challenge",
        "requirement": {"total_points": 1000},
        "points": 100,
    },
]


# Illustrative wearable workouts used to bootstrap an empty inbox.
SAMPLE_INBOX_ITEMS = [
    {
        "workout_data": {
            "heart_rate_data": [78, 142, 165, 158, 171, 159, 88],
            "steps": 3420,
            "duration": 52,
        },
        "auto_detected_type": "Basketball",
        "confidence": "0.91",
        "title": "Basketball Training - Apple Watch",
        "duration": 52,
        "calories_burned": 486,
        "average_heart_rate": 159,
        "max_heart_rate": 171,
        "ai_summary": "High-intensity interval pattern with quick direction changes. Typical basketball training session.",
    },
    {
        "workout_data": {
            "heart_rate_data": [85, 95, 98, 92, 89],
            "steps": 890,
            "duration": 25,
        },
        "auto_detected_type": "Strength Training",
        "confidence": "0.87",
        "title": "Gym Session - Garmin",
        "duration": 25,
        "calories_burned": 198,
        "average_heart_rate": 92,
        "max_heart_rate": 98,
        "ai_summary": "Low step count with sustained moderate heart rate. Resistance training detected.",
    },
    {
        "workout_data": {
            "heart_rate_data": [92, 156, 168, 175, 162, 148, 95],
            "steps": 4200,
            "duration": 38,
        },
        "auto_detected_type": "Cardio",
        "confidence": "0.85",
        "title": "Morning Run - Apple Watch",
        "duration": 38,
        "calories_burned": 342,
        "average_heart_rate": 157,
        "max_heart_rate": 175,
        "ai_summary": "Steady elevated heart rate with consistent step pattern. Running workout identified.",
    },
]
