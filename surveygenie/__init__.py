"""SurveyGenie survey authoring and response aggregation backend."""
