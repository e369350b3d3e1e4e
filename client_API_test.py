import requests

# Manual smoke test against a running server (python server.py)
api_url = "http://localhost:8000"


# Create a new user. Use JSON payload
print("Will create a new user now")
user_data = {"username": "ankit", "email": "ankit@example.com", "password": "securepassword", "roles": {"isSeller": True}}
response = requests.post(f"{api_url}/users", json=user_data)
print(response.status_code, response.json())  # Should print the new user info, roles filled in with defaults
user_id = response.json()["id"]

# Creating the same username again must fail
print("Will create the same user again now")
response = requests.post(f"{api_url}/users", json={**user_data, "email": "other@example.com"})
print(response.status_code, response.json())  # Should be 409

# Read it back
print("Will read the user now")
response = requests.get(f"{api_url}/users/{user_id}")
print(response.status_code, response.json())

# Partial update. Only the email changes
print("Will update the user now")
response = requests.put(f"{api_url}/users/{user_id}", json={"email": "ankit@example.org", "roles": {"isAdmin": True}})
print(response.status_code, response.json())

# Delete, then reading again should give 404
print("Will delete the user now")
response = requests.delete(f"{api_url}/users/{user_id}")
print(response.status_code, response.json())
response = requests.get(f"{api_url}/users/{user_id}")
print(response.status_code, response.json())  # Should be 404
