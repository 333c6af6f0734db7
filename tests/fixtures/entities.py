"""Dict factories producing API wire payloads (camelCase keys)."""

from typing import Iterable, Optional


def make_profile_dict(
    username: str = "jake",
    bio: Optional[str] = "I work at statefarm",
    image: Optional[str] = None,
    following: bool = False,
) -> dict:
    return {
        "username": username,
        "bio": bio,
        "image": image,
        "following": following,
    }


def make_user_dict(
    username: str = "jake",
    email: str = "jake@jake.jake",
    token: str = "jwt.token.here",
    bio: Optional[str] = None,
    image: Optional[str] = None,
) -> dict:
    return {
        "email": email,
        "token": token,
        "username": username,
        "bio": bio,
        "image": image,
    }


def make_article_dict(
    slug: str = "how-to-train-your-dragon",
    title: str = "How to train your dragon",
    description: str = "Ever wonder how?",
    body: str = "It takes a Jacobian",
    author: Optional[dict] = None,
    tag_list: Iterable[str] = ("dragons", "training"),
    favorited: bool = False,
    favorites_count: int = 0,
) -> dict:
    return {
        "slug": slug,
        "title": title,
        "description": description,
        "body": body,
        "tagList": list(tag_list),
        "createdAt": "2016-02-18T03:22:56.637Z",
        "updatedAt": "2016-02-18T03:48:35.824Z",
        "favorited": favorited,
        "favoritesCount": favorites_count,
        "author": author or make_profile_dict(),
    }


def make_comment_dict(
    id: int = 1,
    body: str = "It takes a Jacobian",
    author: Optional[dict] = None,
) -> dict:
    return {
        "id": id,
        "createdAt": "2016-02-18T03:22:56.637Z",
        "updatedAt": "2016-02-18T03:22:56.637Z",
        "body": body,
        "author": author or make_profile_dict(),
    }


def make_article_list_dict(articles: Iterable[dict] = (), count: Optional[int] = None) -> dict:
    articles = list(articles)
    return {
        "articles": articles,
        "articlesCount": len(articles) if count is None else count,
    }
