"""The niuniu chat-group game: rules, storage and commands."""