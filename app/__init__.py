"""Travel chat assistant: guided planning conversation and itinerary export."""
