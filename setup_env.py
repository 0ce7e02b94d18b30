import os
import secrets

def generate_jwt_secret() -> str:
    print("Generating JWT signing secret (256 bits)...")
    return secrets.token_urlsafe(32)

def render_env(env_content: str, jwt_secret: str) -> str:
    # Replace the placeholder line, or append it if the example has none
    new_lines = []
    replaced = False
    for line in env_content.splitlines():
        if line.startswith("JWT_SECRET="):
            new_lines.append(f'JWT_SECRET="{jwt_secret}"')
            replaced = True
        else:
            new_lines.append(line)
    if not replaced:
        new_lines.append(f'JWT_SECRET="{jwt_secret}"')
    return "\n".join(new_lines) + "\n"

def setup_env():
    if os.path.exists(".env"):
        response = input("A .env file already exists. Overwrite it? (y/N): ")
        if response.lower() != 'y':
            print("Aborted.")
            return

    if not os.path.exists(".env.example"):
        print("Error: .env.example not found.")
        return

    print("Reading .env.example...")
    with open(".env.example", "r") as f:
        env_content = f.read()

    with open(".env", "w") as f:
        f.write(render_env(env_content, generate_jwt_secret()))

    print("SUCCESS: .env file created with a new JWT secret.")

if __name__ == "__main__":
    setup_env()
